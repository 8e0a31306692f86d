r"""Backoff decorator bounding the duration of a retry cycle."""

from __future__ import annotations

__all__ = ["TimeoutBackoff", "timeout"]

from dataclasses import dataclass, field

from aretry.backoff.base import EXIT, BackoffDecorator, BaseBackoffStrategy, Clock, Delay
from aretry.defaults import default_clock
from aretry.utils.validation import validate_number, validate_positive


@dataclass(frozen=True)
class TimeoutBackoff(BackoffDecorator):
    """Stop the retry cycle once ``limit`` seconds have passed since it
    started.

    The elapsed time is ``clock() - start``. The boundary is inclusive: a
    cycle that has run for exactly ``limit`` seconds stops.

    Args:
        strategy: The wrapped strategy.
        limit: The maximum duration of a cycle in seconds. Must be > 0.
        clock: Returns the current time, on the same scale as the ``start``
            timestamps passed to ``delay``.

    Raises:
        TypeError: If limit is not a real number.
        ValueError: If limit is not positive.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff, TimeoutBackoff
        >>> backoff = TimeoutBackoff(ConstantBackoff(1.0), limit=2.0, clock=lambda: 12.0)
        >>> backoff.delay(1, start=11.0)
        1.0
        >>> backoff.delay(1, start=10.0)
        EXIT

        ```
    """

    strategy: BaseBackoffStrategy
    limit: float
    clock: Clock = field(default=default_clock, compare=False)

    def __post_init__(self) -> None:
        validate_positive("limit", self.limit)

    def delay(self, attempt: int, start: float) -> Delay:
        if self.clock() - start >= self.limit:
            return EXIT
        return self.strategy.delay(attempt, start)


def timeout(
    strategy: BaseBackoffStrategy,
    limit: float,
    clock: Clock | None = None,
) -> BaseBackoffStrategy:
    """Wrap a strategy to stop the retry cycle after ``limit`` seconds.

    Args:
        strategy: The strategy to wrap.
        limit: The maximum duration of a cycle in seconds. If
            ``limit <= 0``, no timeout is applied.
        clock: Returns the current time. Defaults to
            ``aretry.defaults.default_clock``. It must run on the same scale
            as the clock of the cycle that records the start time.

    Returns:
        The time-limited strategy, or ``strategy`` itself if no timeout
        applies.
    """
    validate_number("limit", limit)
    if limit <= 0:
        return strategy
    return TimeoutBackoff(
        strategy=strategy,
        limit=limit,
        clock=clock if clock is not None else default_clock,
    )
