"""Class-level annotation records and hierarchy-aware lookup.

An annotation kind is a subclass of :class:`Annotation`. Its instances are
class decorators that attach themselves to the decorated class:

    >>> @dataclass(frozen=True)
    ... class Route(Annotation):
    ...     path: str
    >>>
    >>> @Route("/home")
    ... class ShowHome(Command[None]):
    ...     ...
    >>>
    >>> find_annotation(ShowHome, Route)   # Route(path='/home')

Records are stored on the decorated class only; a subclass does not declare
its parent's records, but :func:`find_annotation` can search the hierarchy.
"""

from typing import Optional, Sequence, TypeVar

from tessera.settings import get_settings
from tessera.type_utils import interface_closure, is_in_namespaces, super_types

__all__ = ["Annotation", "annotate", "declared_annotations", "find_annotation"]

ANNOTATIONS_ATTRIBUTE = "__tessera_annotations__"

A = TypeVar("A", bound="Annotation")


class Annotation:
    """Base class for annotation kinds."""

    def __call__(self, target: type) -> type:
        return annotate(target, self)


def annotate(cls: type, *records: Annotation) -> type:
    """Attach annotation records to a class.

    Args:
        cls: The class to annotate.
        *records: Annotation instances, appended after any already declared.

    Returns:
        The class itself, so this can be used inside decorators.

    Raises:
        TypeError: If a record is not an :class:`Annotation`.
    """
    for record in records:
        if not isinstance(record, Annotation):
            raise TypeError(f"{record!r} is not an Annotation")
    setattr(cls, ANNOTATIONS_ATTRIBUTE, declared_annotations(cls) + records)
    return cls


def declared_annotations(cls: type) -> tuple[Annotation, ...]:
    """Return the records attached to the class itself, in attachment order."""
    return vars(cls).get(ANNOTATIONS_ATTRIBUTE, ())


def find_annotation(
    cls: type,
    annotation_kind: type[A],
    search_hierarchy: bool = False,
    skip_namespaces: Optional[Sequence[str]] = None,
) -> Optional[A]:
    """Find an annotation of the given kind attached to a class.

    If the class itself declares none and ``search_hierarchy`` is set, every class
    in its superclass chain is checked, nearest first, followed by every
    interface in its interface closure (see :mod:`tessera.type_utils`). Each of
    those is checked on its own declarations only.

    Args:
        cls: The class to examine.
        annotation_kind: The annotation class to look for. Instances of subclasses
            match too.
        search_hierarchy: Whether to search the class's ancestors and interfaces.
        skip_namespaces: Module prefixes whose classes are never examined. If None,
            the ``skip_namespaces`` setting is used.

    Returns:
        The first matching annotation, or None.

    Example:
        >>> find_annotation(ShowHome, Route)                          # direct only
        >>> find_annotation(ShowHome, Route, True)                    # with ancestors
        >>> find_annotation(ShowHome, Route, True, ["myapp.vendor"])  # excluding a package
    """
    if skip_namespaces is None:
        skip_namespaces = get_settings().skip_namespaces

    if is_in_namespaces(cls, skip_namespaces):
        return None

    annotation = next(
        (
            record
            for record in declared_annotations(cls)
            if isinstance(record, annotation_kind)
        ),
        None,
    )
    if annotation is None and search_hierarchy:
        for super_type in super_types(cls) + interface_closure(cls):
            annotation = find_annotation(super_type, annotation_kind, False, skip_namespaces)
            if annotation is not None:
                return annotation
    return annotation
