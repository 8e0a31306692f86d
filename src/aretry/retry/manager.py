r"""Callback manager for dispatching retry cycle events to error
handlers."""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from aretry.callbacks import ErrorHandler


class CallbackManager:
    """Ordered, append-only collection of error handlers.

    Handlers are invoked synchronously, in registration order, in the
    thread (or task) running the cycle. An exception raised by a handler
    propagates to the caller of the cycle.

    Registration is expected to happen before the first cycle runs. Adding
    handlers while a cycle of the same manager is running is not
    synchronized.
    """

    def __init__(self) -> None:
        self._handlers: list[ErrorHandler] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[ErrorHandler]:
        return iter(tuple(self._handlers))

    def register(self, handler: ErrorHandler) -> None:
        """Append an error handler.

        Args:
            handler: Called with ``(attempt, delay, error)``.

        Raises:
            TypeError: If handler is not callable.
        """
        if not callable(handler):
            msg = f"handler must be callable, got {type(handler).__name__}"
            raise TypeError(msg)
        self._handlers.append(handler)

    def on_error(self, attempt: int, delay: float, error: Exception) -> None:
        """Notify every handler of a failed attempt that will be retried.

        Args:
            attempt: The number of the failed attempt (1-indexed).
            delay: The delay in seconds before the next attempt.
            error: The exception raised by the attempt.
        """
        for handler in self._handlers:
            handler(attempt, delay, error)
