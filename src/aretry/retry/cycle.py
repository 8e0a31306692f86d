r"""Retry cycle driving repeated attempts of a fallible operation.

This module provides the ``RetryCycle`` class. A cycle owns a composed
backoff strategy, a list of error handlers and a clock, and runs any number
of independent retry loops with them.
"""

from __future__ import annotations

__all__ = ["RetryCycle"]

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.backoff.base import EXIT, MAX_DELAY
from aretry.backoff.cap import cap
from aretry.backoff.jitter import jitter
from aretry.backoff.limit import limit
from aretry.backoff.timeout import timeout
from aretry.cancellation import CancellationToken
from aretry.defaults import default_clock
from aretry.exceptions import TerminalError
from aretry.retry.manager import CallbackManager

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.backoff.base import BaseBackoffStrategy, Clock, RandomSource
    from aretry.callbacks import ErrorHandler
    from aretry.retry.config import CycleConfig

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryCycle:
    """Runs an attempt function repeatedly until it succeeds, is aborted,
    or the backoff strategy gives up.

    The configuration methods wrap the held strategy in decorators and
    return the cycle itself, so they can be chained. They are meant to be
    called during setup: reconfiguring a cycle while one of its runs is in
    progress is the caller's responsibility. Once configured, a cycle can
    drive any number of runs, concurrently or not, since all run state
    (attempt counter, start time, timer) is local to each run.

    Args:
        strategy: The backoff strategy computing the delay between
            attempts.
        clock: Returns the current time in seconds. Used to record the
            start of each run. Defaults to ``aretry.defaults.default_clock``.

    Example:
        ```pycon
        >>> from aretry import RetryCycle
        >>> from aretry.backoff import exponential
        >>> cycle = RetryCycle(exponential(0.002, 2.0)).with_cap(2.0).with_limit(10)
        >>> cycle.on_error(
        ...     lambda n, delay, err: print(f"attempt #{n}: {err} => wait {delay * 1000:2.0f} ms")
        ... )  # doctest: +ELLIPSIS
        RetryCycle(...)
        >>> def attempt(n):
        ...     if n < 5:
        ...         raise RuntimeError("failed")
        ...     return n
        ...
        >>> cycle.run(attempt)
        attempt #1: failed => wait  2 ms
        attempt #2: failed => wait  4 ms
        attempt #3: failed => wait  8 ms
        attempt #4: failed => wait 16 ms
        5

        ```
    """

    def __init__(self, strategy: BaseBackoffStrategy, clock: Clock | None = None) -> None:
        self._strategy = strategy
        self._clock: Clock = clock if clock is not None else default_clock
        self._callbacks = CallbackManager()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(strategy={self._strategy!r}, "
            f"handlers={len(self._callbacks)})"
        )

    @classmethod
    def from_config(
        cls,
        strategy: BaseBackoffStrategy,
        config: CycleConfig,
        clock: Clock | None = None,
    ) -> RetryCycle:
        """Create a cycle and apply a ``CycleConfig`` to it.

        Args:
            strategy: The base backoff strategy.
            config: The decorator settings to apply.
            clock: Optional clock, see ``RetryCycle``.

        Returns:
            The configured cycle.
        """
        return cls(strategy, clock=clock).configure(config)

    @property
    def strategy(self) -> BaseBackoffStrategy:
        """The composed backoff strategy."""
        return self._strategy

    @property
    def clock(self) -> Clock:
        """The clock recording the start of each run."""
        return self._clock

    @property
    def callbacks(self) -> CallbackManager:
        """The registered error handlers."""
        return self._callbacks

    def with_cap(self, max_delay: float) -> RetryCycle:
        """Cap the delay between consecutive attempts.

        Args:
            max_delay: The maximum delay in seconds. If ``max_delay <= 0``,
                no cap is applied.

        Returns:
            The cycle itself.
        """
        self._strategy = cap(self._strategy, max_delay)
        return self

    def with_jitter(self, spread: float, random: RandomSource | None = None) -> RetryCycle:
        """Randomly spread the delays between consecutive attempts.

        Args:
            spread: The relative range in which delays are scattered, in
                [0, 1). A spread of 0.5 results in delays ranging between
                50% below and 50% above the undecorated ones. If
                ``spread == 0``, no jitter is applied.
            random: Source of uniform samples in [0, 1). Defaults to
                ``aretry.defaults.default_random``.

        Returns:
            The cycle itself.

        Raises:
            ValueError: If spread is outside [0, 1).
        """
        self._strategy = jitter(self._strategy, spread, random)
        return self

    def with_limit(self, max_attempts: int) -> RetryCycle:
        """Limit the number of attempts per run.

        Args:
            max_attempts: A run stops after this many attempts. If
                ``max_attempts < 1``, no limit is applied.

        Returns:
            The cycle itself.
        """
        self._strategy = limit(self._strategy, max_attempts)
        return self

    def with_timeout(self, max_duration: float, clock: Clock | None = None) -> RetryCycle:
        """Limit the duration of each run.

        A run stops retrying once ``max_duration`` seconds have passed
        since its first attempt started. A running attempt is never
        interrupted.

        Args:
            max_duration: The maximum duration in seconds. If
                ``max_duration <= 0``, no timeout is applied.
            clock: Returns the current time. Defaults to the cycle's own
                clock, which also records the start of each run.

        Returns:
            The cycle itself.
        """
        self._strategy = timeout(
            self._strategy, max_duration, clock if clock is not None else self._clock
        )
        return self

    def on_error(self, handler: ErrorHandler) -> RetryCycle:
        """Register an error handler.

        Handlers are called, in registration order, after each failed
        attempt that is going to be retried and before the wait starts.
        They are not called for the attempt that ends the run. Typically,
        they log intermediate errors that would otherwise go unnoticed.

        Args:
            handler: Called with ``(attempt, delay, error)``.

        Returns:
            The cycle itself.
        """
        self._callbacks.register(handler)
        return self

    def configure(self, config: CycleConfig) -> RetryCycle:
        """Apply the decorator settings of a ``CycleConfig``.

        Decorators are layered in the order jitter, cap, limit, timeout.

        Args:
            config: The settings to apply. Unset fields are skipped.

        Returns:
            The cycle itself.
        """
        if config.spread:
            self.with_jitter(config.spread)
        if config.max_delay is not None:
            self.with_cap(config.max_delay)
        if config.max_attempts is not None:
            self.with_limit(config.max_attempts)
        if config.max_duration is not None:
            self.with_timeout(config.max_duration)
        return self

    def run(self, attempt: Callable[[int], T]) -> T:
        """Run ``attempt`` until it succeeds or the strategy gives up.

        Equivalent to ``run_with_cancellation`` with a token that is never
        cancelled. Be aware that a cycle with neither limit nor timeout
        runs forever if the attempt keeps failing.

        Args:
            attempt: Called with the attempt number, starting at 1. Raising
                an exception marks the attempt as failed. Raising a
                ``TerminalError`` stops the run.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            Exception: The cause of a ``TerminalError``, or the exception of
                the last attempt if the strategy stopped the run.
        """
        return self.run_with_cancellation(CancellationToken(), attempt)

    def run_with_cancellation(
        self, token: CancellationToken, attempt: Callable[[int], T]
    ) -> T:
        """Run ``attempt`` until it succeeds, the strategy gives up, or
        ``token`` is cancelled.

        The attempt is always invoked at least once, even if the token is
        already cancelled. Cancellation takes effect while waiting between
        attempts, or when the strategy gives up; it never interrupts a
        running attempt.

        On cancellation, the token's error instance itself is raised, chained
        to the last attempt error. Runs sharing a token therefore raise the
        same instance, and its ``__cause__`` is set by the last one to stop.

        Args:
            token: The cancellation token observed during the run.
            attempt: Called with the attempt number, starting at 1. Raising
                an exception marks the attempt as failed. Raising a
                ``TerminalError`` stops the run.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            Exception: The token's error if the run was cancelled, the cause
                of a ``TerminalError``, or the exception of the last attempt
                if the strategy stopped the run.
        """
        start = self._clock()
        n = 0
        while True:
            n += 1
            try:
                result = attempt(n)
            except TerminalError as exc:
                logger.debug(f"Attempt #{n} forced the retry cycle to exit: {exc.cause!r}")
                raise exc.cause from None
            except Exception as exc:  # noqa: BLE001
                error = exc
            else:
                if n > 1:
                    logger.debug(f"Attempt #{n} succeeded after {n - 1} failures")
                return result

            delay = self._next_delay(n, start, error, token)
            if token.wait(delay):
                logger.debug(f"Retry cycle cancelled while waiting after attempt #{n}")
                raise _cancellation_error(token) from error

    async def run_async(self, attempt: Callable[[int], Awaitable[T]]) -> T:
        """Asynchronous version of ``run``.

        Args:
            attempt: Coroutine function called with the attempt number,
                starting at 1.

        Returns:
            The value returned by the first successful attempt.
        """
        return await self.run_async_with_cancellation(CancellationToken(), attempt)

    async def run_async_with_cancellation(
        self, token: CancellationToken, attempt: Callable[[int], Awaitable[T]]
    ) -> T:
        """Asynchronous version of ``run_with_cancellation``.

        The wait between attempts is an event loop timer raced against the
        token, so other tasks keep running meanwhile. Cancelling the
        surrounding task propagates ``asyncio.CancelledError`` as usual.

        Args:
            token: The cancellation token observed during the run. It may be
                cancelled from any thread.
            attempt: Coroutine function called with the attempt number,
                starting at 1.

        Returns:
            The value returned by the first successful attempt.
        """
        start = self._clock()
        n = 0
        while True:
            n += 1
            try:
                result = await attempt(n)
            except TerminalError as exc:
                logger.debug(f"Attempt #{n} forced the retry cycle to exit: {exc.cause!r}")
                raise exc.cause from None
            except Exception as exc:  # noqa: BLE001
                error = exc
            else:
                if n > 1:
                    logger.debug(f"Attempt #{n} succeeded after {n - 1} failures")
                return result

            delay = self._next_delay(n, start, error, token)
            if await _sleep_or_cancel(token, delay):
                logger.debug(f"Retry cycle cancelled while waiting after attempt #{n}")
                raise _cancellation_error(token) from error

    def _next_delay(
        self, attempt: int, start: float, error: Exception, token: CancellationToken
    ) -> float:
        """Consult the strategy after a failed attempt and notify the error
        handlers if the run continues.

        Raises:
            Exception: The token's error if the strategy returned ``EXIT``
                while the token is cancelled, else the attempt's error.
        """
        delay = self._strategy.delay(attempt, start)
        if delay is EXIT:
            if token.cancelled:
                logger.debug(f"Retry cycle cancelled after attempt #{attempt}")
                raise _cancellation_error(token) from error
            logger.debug(f"Retry cycle gave up after attempt #{attempt}: {error!r}")
            raise error

        self._callbacks.on_error(attempt, delay, error)
        logger.debug(f"Attempt #{attempt} failed, retrying in {delay:.3f}s: {error!r}")
        return delay


def _cancellation_error(token: CancellationToken) -> Exception:
    error = token.error
    if error is None:  # pragma: no cover
        # cancelled tokens always carry an error
        msg = "cancelled token without error"
        raise RuntimeError(msg)
    return error


async def _sleep_or_cancel(token: CancellationToken, delay: float) -> bool:
    """Wait for ``delay`` seconds unless ``token`` is cancelled first.

    Returns:
        True if the token won the race, False if the delay elapsed.
    """
    loop = asyncio.get_running_loop()
    waiter: asyncio.Future[bool] = loop.create_future()

    def finish(cancelled: bool) -> None:
        if not waiter.done():
            waiter.set_result(cancelled)

    def wake() -> None:
        if not loop.is_closed():
            loop.call_soon_threadsafe(finish, True)

    timer = loop.call_later(min(delay, MAX_DELAY), finish, False)
    unsubscribe = token.subscribe(wake)
    try:
        return await waiter
    finally:
        timer.cancel()
        unsubscribe()
