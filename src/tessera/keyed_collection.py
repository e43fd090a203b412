"""A collection of values keyed by a key derived from each value.

Values are stored in a mapping from key to value, alongside a list of keys in
insertion order. The two serve different purposes and are kept as two
orderings on purpose:

- positional access (:meth:`KeyedCollection.get_at`, :meth:`KeyedCollection.remove_at`)
  follows insertion order;
- iteration follows the backing mapping's own order. With the default ``dict``
  that is also insertion order, but a caller-supplied mapping may order its
  keys differently.

Instances are not safe for concurrent mutation.
"""

import inspect
from abc import abstractmethod
from collections.abc import Collection, Iterable, Iterator, MutableMapping
from typing import Generic, Optional, TypeVar, get_origin

from tessera.type_utils import generic_parameter_type

__all__ = ["KeyedCollection"]

K = TypeVar("K")
V = TypeVar("V")


class KeyedCollection(Collection, Generic[K, V]):
    """Base class for collections whose values carry their own unique key.

    Subclasses bind the key and value types and implement :meth:`key_for_item`.
    The bound value type is used by membership tests: an object that is not an
    instance of it is never contained.

    Example:
        >>> class Routes(KeyedCollection[str, Route]):
        ...     def key_for_item(self, item: Route) -> str:
        ...         return item.path
        >>>
        >>> routes = Routes()
        >>> routes.add(Route("/home"))   # True
        >>> routes.add(Route("/home"))   # False, key already present
        >>> routes.get("/home")          # Route(path='/home')
        >>> routes.get_at(0)             # Route(path='/home')
    """

    def __init__(self, mapping: Optional[MutableMapping[K, V]] = None):
        """
        Args:
            mapping: Optional backing mapping from keys to values. Values it already
                holds become the collection's initial contents, in the mapping's
                iteration order. Defaults to a new ``dict``.
        """
        self._items: MutableMapping[K, V] = mapping if mapping is not None else {}
        self._keys: list[K] = list(self._items.keys())

    @abstractmethod
    def key_for_item(self, item: V) -> Optional[K]:
        """Derive the key of a value. A None key means the value cannot be stored."""

    def add(self, item: V) -> bool:
        """Add a value unless its key is None or already present.

        Returns:
            True if the value was added.
        """
        key = self.key_for_item(item)
        if key is None or key in self._items:
            return False
        self._keys.append(key)
        self._items[key] = item
        return True

    def add_all(self, items: Iterable[V]) -> bool:
        """Add each value in turn. Returns True if any was added."""
        added = False
        for item in items:
            added = self.add(item) or added
        return added

    def get(self, key: K) -> Optional[V]:
        if self.contains_key(key):
            return self._items[key]
        return None

    def get_at(self, index: int) -> Optional[V]:
        """Return the value at a position in insertion order, or None if the index is out of range."""
        if self._is_valid_index(index):
            return self._items[self._keys[index]]
        return None

    def contains(self, item: object) -> bool:
        """Check whether a value with the same key as ``item`` is present.

        ``item`` must be an instance of the collection's bound value type. A
        parameterised generic such as ``dict[str, int]`` is checked by its class
        (``dict``); a forward reference or other non-class binding admits any object.
        """
        return (
            item is not None
            and isinstance(item, self._value_class())
            and self.contains_key(self.key_for_item(item))
        )

    def contains_key(self, key: Optional[K]) -> bool:
        return key is not None and key in self._items

    def contains_all(self, items: Optional[Iterable[object]]) -> bool:
        """Check whether every given value is contained. False for an empty or absent input."""
        items = list(items or [])
        if not items:
            return False
        return all(self.contains(item) for item in items)

    def remove(self, item: object) -> bool:
        """Remove the value with the same key as ``item``.

        Only values passing the :meth:`contains` check are removed, so ``item`` is
        never handed to :meth:`key_for_item` unless it is an instance of the bound
        value type.

        Returns:
            True if a value was removed.
        """
        return self.contains(item) and self.remove_by_key(self.key_for_item(item))

    def remove_at(self, index: int) -> bool:
        return self._is_valid_index(index) and self.remove_by_key(self._keys[index])

    def remove_by_key(self, key: Optional[K]) -> bool:
        if not self.contains_key(key):
            return False
        self._keys.remove(key)
        del self._items[key]
        return True

    def remove_all(self, items: Optional[Iterable[object]]) -> bool:
        """Remove each given value.

        Returns:
            False for an empty or absent input, otherwise True only if every value
            was removed.
        """
        items = list(items or [])
        if not items:
            return False
        removed = True
        for item in items:
            removed = self.remove(item) and removed
        return removed

    def retain_all(self, reference: Optional[Collection[object]]) -> bool:
        """Remove every value that is not in ``reference``.

        An empty or absent reference clears the collection.

        Returns:
            True if the collection was cleared, otherwise the result of removing
            the values not in ``reference`` (see :meth:`remove_all`).
        """
        if not reference:
            self.clear()
            return True
        return self.remove_all([item for item in self if item not in reference])

    def clear(self) -> None:
        self._keys.clear()
        self._items.clear()

    def is_empty(self) -> bool:
        return len(self) == 0

    def to_list(self) -> list[V]:
        """Return the values in iteration order."""
        return list(self._items.values())

    def __contains__(self, item: object) -> bool:
        return self.contains(item)

    def __iter__(self) -> Iterator[V]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def _is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self)

    def _value_class(self) -> type:
        value_type = generic_parameter_type(self, 1)
        value_class = get_origin(value_type) or value_type
        return value_class if inspect.isclass(value_class) else object
