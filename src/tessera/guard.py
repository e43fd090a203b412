"""Precondition checks that raise a caller-chosen error kind.

The error kind is any exception class constructible with either no arguments
or a single message argument. It is built through the object factory, so an
error kind that cannot be constructed surfaces as
:class:`~tessera.errors.ResolutionError` instead of the requested error.
"""

from typing import Any, Optional

from tessera.errors import ResolutionError
from tessera.factory import create_object

__all__ = ["against", "is_not_none"]


def is_not_none(
    candidate: Any, error_kind: type[BaseException], message: Optional[str] = None
) -> None:
    """Raise ``error_kind`` if ``candidate`` is None.

    Args:
        candidate: The value to check.
        error_kind: Exception class to raise.
        message: Message given to the exception. If None, the exception is built
            without arguments.

    Raises:
        error_kind: If candidate is None.
        ResolutionError: If ``error_kind`` cannot be constructed.
    """
    against(candidate is None, error_kind, message)


def against(
    fail_condition: bool, error_kind: type[BaseException], message: Optional[str] = None
) -> None:
    """Raise ``error_kind`` if ``fail_condition`` holds.

    Example:
        >>> against(len(items) == 0, ValueError, "items must not be empty")
    """
    if not fail_condition:
        return

    error = create_object(error_kind, message) if message is not None else create_object(error_kind)
    if not isinstance(error, BaseException):
        raise ResolutionError(f"{error_kind!r} did not construct an exception")
    raise error
