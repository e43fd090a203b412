"""Classification and hierarchy queries over Python classes.

A value's declared type is normally just ``type(value)``. The exception is a
boxed primitive: ``ctypes`` simple data objects wrap a ``bool``, ``int``,
``float``, ``bytes`` or ``str`` payload, and classify as that primitive so that
argument types derived from live values line up with signatures declared in
terms of the primitive.

The hierarchy helpers model a class as having one superclass (the first entry
of ``__bases__``) and a list of declared interfaces (the remaining entries).
"""

import ctypes
import inspect
import types
from typing import Any, Annotated, Optional, TypeVar, Union, get_args, get_origin

__all__ = [
    "classify",
    "unbox",
    "is_boxed",
    "is_assignable",
    "superclass_of",
    "declared_interfaces",
    "super_types",
    "interface_closure",
    "is_in_namespaces",
    "generic_parameter_type",
]

NoneType = type(None)

_BOXED_PRIMITIVES: dict[type, type] = {
    ctypes.c_bool: bool,
    ctypes.c_byte: int,
    ctypes.c_ubyte: int,
    ctypes.c_short: int,
    ctypes.c_ushort: int,
    ctypes.c_int: int,
    ctypes.c_uint: int,
    ctypes.c_long: int,
    ctypes.c_ulong: int,
    ctypes.c_longlong: int,
    ctypes.c_ulonglong: int,
    ctypes.c_float: float,
    ctypes.c_double: float,
    ctypes.c_longdouble: float,
    ctypes.c_char: bytes,
    ctypes.c_wchar: str,
}


def is_boxed(value: Any) -> bool:
    """Check whether a value is a ``ctypes`` simple data wrapper."""
    return isinstance(value, ctypes._SimpleCData)


def classify(value: Any) -> type:
    """Return the type a value should be matched as.

    Args:
        value: The value to classify. Must not be None.

    Returns:
        The primitive type for a boxed primitive, ``NoneType`` for a wrapper that
        does not box a known primitive, otherwise ``type(value)``.

    Raises:
        TypeError: If value is None.

    Example:
        >>> classify(ctypes.c_int(3))   # int
        >>> classify(3)                 # int
        >>> classify(ctypes.c_char_p()) # NoneType
    """
    if value is None:
        raise TypeError("Cannot classify None")

    if is_boxed(value):
        for wrapper_type in type(value).__mro__:
            if wrapper_type in _BOXED_PRIMITIVES:
                return _BOXED_PRIMITIVES[wrapper_type]
        return NoneType

    return type(value)


def unbox(value: Any) -> Any:
    """Return the payload of a boxed primitive, or the value itself."""
    if is_boxed(value) and classify(value) is not NoneType:
        return value.value
    return value


def is_assignable(formal: Any, actual: type) -> bool:
    """Check whether a value of type ``actual`` may be passed where ``formal`` is declared.

    Unannotated parameters, ``object`` and ``Any`` accept every type. Unions accept
    a type if any member does; ``Annotated`` and parameterised generics are
    compared by their underlying class. Numeric types are not widened.

    Example:
        >>> is_assignable(Animal, Dog)          # True
        >>> is_assignable(Optional[Dog], Dog)   # True
        >>> is_assignable(float, int)           # False
    """
    if formal is inspect.Parameter.empty or formal is Any or formal is object:
        return True

    if formal is None:
        formal = NoneType

    if isinstance(formal, TypeVar):
        if formal.__constraints__:
            return any(is_assignable(c, actual) for c in formal.__constraints__)
        return is_assignable(formal.__bound__ or object, actual)

    origin = get_origin(formal)
    if origin is Annotated:
        return is_assignable(get_args(formal)[0], actual)
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(member, actual) for member in get_args(formal))
    if origin is not None:
        formal = origin

    if not inspect.isclass(formal) or not inspect.isclass(actual):
        return False
    try:
        return issubclass(actual, formal)
    except TypeError:
        # Non-runtime-checkable protocols refuse issubclass checks.
        return False


def superclass_of(cls: type) -> Optional[type]:
    """Return the primary base of a class, or None for ``object``."""
    bases = cls.__bases__
    return bases[0] if bases else None


def declared_interfaces(cls: type) -> list[type]:
    """Return the secondary bases a class declares directly."""
    return list(cls.__bases__[1:])


def super_types(cls: type) -> list[type]:
    """Fetch the superclass chain of a class, nearest first.

    The class itself is not included; ``object`` is always the last entry.

    Example:
        >>> class Base: ...
        >>> class Child(Base, Mixin): ...
        >>> super_types(Child)   # [Base, object]
    """
    ancestors: list[type] = []
    superclass = superclass_of(cls)
    while superclass is not None:
        if superclass not in ancestors:
            ancestors.append(superclass)
        superclass = superclass_of(superclass)
    return ancestors


def interface_closure(cls: type) -> list[type]:
    """Fetch the interfaces declared by a class and by every class in its superclass chain.

    Interfaces are listed in discovery order: the superclass chain is walked from
    ``cls`` upwards, and each class contributes its declared interfaces in
    declaration order. Duplicates are dropped. Interfaces inherited by the
    interfaces themselves are not expanded.

    Example:
        >>> class Base(Root, Printable): ...
        >>> class Child(Base, Comparable, Printable): ...
        >>> interface_closure(Child)   # [Comparable, Printable]
    """
    interfaces: list[type] = []
    current: Optional[type] = cls
    while current is not None:
        for interface in declared_interfaces(current):
            if interface not in interfaces:
                interfaces.append(interface)
        current = superclass_of(current)
    return interfaces


def is_in_namespaces(cls: type, namespaces: Optional[tuple[str, ...] | list[str]]) -> bool:
    """Check whether a class is defined in one of the given packages or modules.

    Namespaces are matched by dotted prefix: ``"abc"`` covers ``abc`` and
    ``abc.sub`` but not ``abcorp``.
    """
    if not namespaces:
        return False
    module = getattr(cls, "__module__", None) or ""
    return any(
        module == namespace or module.startswith(namespace + ".")
        for namespace in namespaces
    )


def generic_parameter_type(obj: Any, index: int) -> Optional[type]:
    """Return a type argument bound by the generic bases of an object's class.

    Walks the class's MRO and inspects each class's own parameterised bases
    (``__orig_bases__``), returning the argument at ``index`` of the first one
    that binds a concrete type there.

    Args:
        obj: The object to examine.
        index: Zero-based position of the type argument.

    Returns:
        The type argument, or None if no parameterised base binds one.

    Example:
        >>> class Routes(KeyedCollection[str, Route]): ...
        >>> generic_parameter_type(Routes(), 1)   # Route
    """
    for klass in type(obj).__mro__:
        for base in vars(klass).get("__orig_bases__", ()):
            arguments = get_args(base)
            if index < len(arguments) and not isinstance(arguments[index], TypeVar):
                return arguments[index]
    return None
