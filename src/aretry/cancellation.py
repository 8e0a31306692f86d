r"""Cancellation tokens for interrupting retry cycles.

A ``CancellationToken`` is owned by the caller of a retry cycle. Cancelling
it aborts the cycle during its next wait. It never interrupts an attempt
that is already running.

Example:
    ```pycon
    >>> from aretry.cancellation import CancellationToken
    >>> token = CancellationToken()
    >>> token.cancelled
    False
    >>> token.cancel()
    True
    >>> token.cancelled
    True
    >>> token.error
    CycleCancelledError('retry cycle cancelled')

    ```
"""

from __future__ import annotations

__all__ = ["CancellationToken"]

import logging
import threading
from typing import TYPE_CHECKING

from aretry.backoff.base import MAX_DELAY
from aretry.exceptions import CycleCancelledError, DeadlineExceededError
from aretry.utils.validation import validate_number

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


def _noop() -> None:
    """Unsubscribe function for callbacks that already fired."""


class CancellationToken:
    r"""Thread-safe, one-shot cancellation signal.

    The first call to ``cancel`` wins: it records the error to surface to
    the cycle, wakes up every waiter and fires the subscribed callbacks.
    Later calls have no effect.

    Attributes:
        cancelled: Whether the token has been cancelled.
        error: The error recorded by the first ``cancel`` call, or None.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken
        >>> token = CancellationToken()
        >>> token.wait(0.001)  # times out
        False
        >>> token.cancel(TimeoutError("shutting down"))
        True
        >>> token.wait(10.0)  # returns immediately
        True
        >>> token.cancel()
        False
        >>> token.error
        TimeoutError('shutting down')

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._error: Exception | None = None
        self._callbacks: list[Callable[[], None]] = []
        self._timer: threading.Timer | None = None

    @property
    def cancelled(self) -> bool:
        """Whether the token has been cancelled."""
        return self._event.is_set()

    @property
    def error(self) -> Exception | None:
        """The error recorded by the first ``cancel`` call, or None.

        Every cycle observing the token raises this same instance, so its
        ``__cause__`` and ``__traceback__`` describe the most recent cycle
        that raised it.
        """
        with self._lock:
            return self._error

    def cancel(self, error: Exception | None = None) -> bool:
        """Cancel the token.

        Args:
            error: The error surfaced by cycles observing the token.
                Defaults to ``CycleCancelledError()``.

        Returns:
            True if this call cancelled the token, False if it was already
            cancelled.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._error = error if error is not None else CycleCancelledError()
            callbacks, self._callbacks = self._callbacks, []
            timer, self._timer = self._timer, None
            self._event.set()

        if timer is not None:
            timer.cancel()
        logger.debug(f"Cancellation token cancelled with {self._error!r}")
        for callback in callbacks:
            callback()
        return True

    def cancel_after(self, seconds: float) -> None:
        """Arm a deadline: cancel the token with ``DeadlineExceededError``
        once ``seconds`` have passed.

        Arming a new deadline replaces the previous one. A non-positive
        value cancels the token right away.

        Args:
            seconds: The delay before cancellation, in seconds.
        """
        validate_number("seconds", seconds)
        if seconds <= 0:
            self.cancel(DeadlineExceededError())
            return

        timer = threading.Timer(seconds, self.cancel, args=(DeadlineExceededError(),))
        timer.daemon = True
        with self._lock:
            if self._event.is_set():
                return
            previous, self._timer = self._timer, timer
        if previous is not None:
            previous.cancel()
        timer.start()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the token is cancelled or ``timeout`` seconds have
        passed, whichever comes first.

        Args:
            timeout: The maximum time to wait in seconds. None waits
                forever. Values above ``MAX_DELAY`` are reduced to it.

        Returns:
            True if the token was cancelled, False if the wait timed out.
        """
        if timeout is not None:
            timeout = min(timeout, MAX_DELAY)
        return self._event.wait(timeout)

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback fired once when the token is cancelled.

        If the token is already cancelled, the callback fires immediately
        in the calling thread. Otherwise it fires in the thread that calls
        ``cancel``.

        Args:
            callback: The function to call, without arguments.

        Returns:
            A function removing the callback. Calling it after the callback
            fired is harmless.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._unsubscribe(callback)
        callback()
        return _noop

    def _unsubscribe(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
