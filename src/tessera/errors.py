__all__ = ["TesseraError", "ResolutionError"]


class TesseraError(Exception):
    """Base class for errors raised by tessera."""

    pass


class ResolutionError(TesseraError):
    """Raised when a constructor or method cannot be resolved or reflectively invoked.

    The underlying failure, if any, is chained as ``__cause__``.
    """

    pass
