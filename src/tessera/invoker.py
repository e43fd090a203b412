"""Reflective method invocation."""

import inspect
import logging
from typing import Any

from tessera.errors import ResolutionError
from tessera.guard import against, is_not_none
from tessera.members import find_method
from tessera.type_utils import classify, unbox

__all__ = ["invoke_method"]

logger = logging.getLogger(__name__)


def invoke_method(target: Any, method_name: str, throw_on_error: bool, *args: Any) -> Any:
    """Invoke a public method of an object by name.

    With no arguments the method is looked up directly on ``target`` (so inherited
    methods are found) and must be callable without arguments. With arguments,
    the method is resolved by matching the arguments' classified types against
    the method's declared signatures (see :func:`tessera.members.find_method`).

    Args:
        target: The object whose method is invoked.
        method_name: Name of the method.
        throw_on_error: If True, failing to resolve the method raises
            ResolutionError; otherwise None is returned. Exceptions raised by the
            method itself always propagate, whatever this flag says.
        *args: Arguments passed to the method. Boxed primitives are passed unboxed.

    Returns:
        The method's return value, or None if it could not be resolved and
        ``throw_on_error`` is False.

    Raises:
        ResolutionError: If the method cannot be resolved and ``throw_on_error`` is True.

    Example:
        >>> invoke_method(greeter, "greet", True, "Arthur")   # greeter.greet("Arthur")
        >>> invoke_method(greeter, "missing", False)          # None
    """
    try:
        method = _resolve(target, method_name, args)
    except ResolutionError:
        if throw_on_error:
            raise
        logger.debug("Ignoring unresolved method %s on %r", method_name, target)
        return None

    return method(*(unbox(argument) for argument in args))


def _resolve(target: Any, method_name: str, args: tuple[Any, ...]):
    target_name = f"{type(target).__module__}.{type(target).__qualname__}"

    if not args:
        method = None if method_name.startswith("_") else getattr(target, method_name, None)
        is_not_none(
            method if callable(method) and _accepts_no_arguments(method) else None,
            ResolutionError,
            f"No such method found: {target_name}.{method_name}",
        )
        return method

    against(
        any(argument is None for argument in args),
        ResolutionError,
        f"Cannot resolve method {target_name}.{method_name} for None arguments",
    )
    member = find_method(type(target), method_name, [classify(argument) for argument in args])
    is_not_none(member, ResolutionError, f"No such method found: {target_name}.{method_name}")
    return getattr(target, member.name)


def _accepts_no_arguments(method: Any) -> bool:
    try:
        inspect.signature(method).bind()
    except TypeError:
        return False
    except ValueError:
        # No introspectable signature; let the call decide.
        return True
    return True
