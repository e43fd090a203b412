"""Reflective object construction.

:func:`create_object` builds an instance of a class from an arbitrary argument
list, choosing the constructor by matching the arguments' classified types
against the class's declared constructor signatures.
"""

import inspect
import logging
from typing import Any, TypeVar

from tessera.errors import ResolutionError
from tessera.members import find_constructor
from tessera.type_utils import classify, unbox

__all__ = ["create_object"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_object(cls: type[T], *args: Any) -> T:
    """Create an instance of a class.

    With no arguments the class is called directly. Otherwise the arguments are
    classified (see :func:`tessera.type_utils.classify`), a constructor accepting
    their types is resolved, and the class is called with the arguments in order.
    Boxed primitives are passed unboxed.

    Args:
        cls: The class to instantiate.
        *args: Arguments for the constructor.

    Returns:
        A new instance of ``cls``.

    Raises:
        ResolutionError: If ``cls`` is not a class, no constructor accepts the
            arguments, or the constructor fails. The original exception, if any,
            is chained as the cause.

    Example:
        >>> create_object(Greeter)              # Greeter()
        >>> create_object(Greeter, "Arthur")    # Greeter("Arthur")
        >>> create_object(Greeter, 1, 2, 3)     # ResolutionError
    """
    if not inspect.isclass(cls):
        raise ResolutionError(f"{cls!r} is not a class")

    if args:
        if any(argument is None for argument in args):
            raise ResolutionError(
                f"Cannot resolve a constructor of {_qualified_name(cls)} for None arguments"
            )
        argument_types = [classify(argument) for argument in args]
        constructor = find_constructor(cls, argument_types)
        if constructor is None:
            raise ResolutionError(
                f"No such constructor found: {_qualified_name(cls)}.__init__"
            )
        args = tuple(unbox(argument) for argument in args)

    try:
        instance = cls(*args)
    except Exception as exc:
        raise ResolutionError(f"Could not create {_qualified_name(cls)}: {exc}") from exc

    logger.debug("Created %s", _qualified_name(cls))
    return instance


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
