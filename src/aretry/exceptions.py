r"""Exceptions raised by, or recognized by, retry cycles."""

from __future__ import annotations

__all__ = [
    "CycleCancelledError",
    "DeadlineExceededError",
    "TerminalError",
    "force_exit",
]


class TerminalError(Exception):
    """Exception that ends a retry cycle immediately.

    An attempt raises it to signal that retrying is pointless. The cycle
    then stops without consulting its strategy or notifying its error
    handlers, and raises the wrapped ``cause`` to its caller.

    Args:
        cause: The exception to surface to the caller of the cycle.

    Attributes:
        cause: The wrapped exception.

    Example:
        ```pycon
        >>> from aretry.exceptions import TerminalError
        >>> error = TerminalError(ValueError("bad credentials"))
        >>> error.cause
        ValueError('bad credentials')
        >>> str(error)
        'bad credentials'

        ```
    """

    def __init__(self, cause: Exception) -> None:
        super().__init__(str(cause))
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cause!r})"


def force_exit(error: Exception) -> TerminalError:
    """Wrap an exception to force the retry cycle to stop.

    Args:
        error: The exception to surface to the caller of the cycle.

    Returns:
        The wrapping ``TerminalError``, meant to be raised by the attempt.

    Example:
        ```pycon
        >>> from aretry.exceptions import force_exit
        >>> def attempt(n):
        ...     try:
        ...         raise PermissionError("forbidden")
        ...     except PermissionError as exc:
        ...         raise force_exit(exc) from exc
        ...

        ```
    """
    return TerminalError(error)


class CycleCancelledError(Exception):
    """Exception raised when a retry cycle is cancelled through its token.

    Args:
        message: A descriptive error message.

    Example:
        ```pycon
        >>> from aretry.exceptions import CycleCancelledError
        >>> raise CycleCancelledError()
        Traceback (most recent call last):
            ...
        aretry.exceptions.CycleCancelledError: retry cycle cancelled

        ```
    """

    def __init__(self, message: str = "retry cycle cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(CycleCancelledError):
    """Exception raised when the deadline of a cancellation token passes.

    Args:
        message: A descriptive error message.
    """

    def __init__(self, message: str = "deadline exceeded") -> None:
        super().__init__(message)
