r"""Backoff decorator capping the delays of another strategy."""

from __future__ import annotations

__all__ = ["CapBackoff", "cap"]

from dataclasses import dataclass

from aretry.backoff.base import EXIT, BackoffDecorator, BaseBackoffStrategy, Delay
from aretry.utils.validation import validate_number, validate_positive


@dataclass(frozen=True)
class CapBackoff(BackoffDecorator):
    """Limit the delays produced by the wrapped strategy to ``max_delay``.

    ``EXIT`` passes through unchanged.

    Args:
        strategy: The wrapped strategy.
        max_delay: The maximum delay in seconds. Must be > 0.

    Raises:
        TypeError: If max_delay is not a real number.
        ValueError: If max_delay is not positive.

    Example:
        ```pycon
        >>> from aretry.backoff import CapBackoff, ExponentialBackoff
        >>> backoff = CapBackoff(ExponentialBackoff(1.0, 2.0), max_delay=5.0)
        >>> [backoff.delay(n, start=0.0) for n in range(1, 6)]
        [1.0, 2.0, 4.0, 5.0, 5.0]

        ```
    """

    strategy: BaseBackoffStrategy
    max_delay: float

    def __post_init__(self) -> None:
        validate_positive("max_delay", self.max_delay)

    def delay(self, attempt: int, start: float) -> Delay:
        delay = self.strategy.delay(attempt, start)
        if delay is EXIT:
            return EXIT
        return min(delay, self.max_delay)


def cap(strategy: BaseBackoffStrategy, max_delay: float) -> BaseBackoffStrategy:
    """Wrap a strategy so that its delays never exceed ``max_delay``.

    Args:
        strategy: The strategy to wrap.
        max_delay: The maximum delay in seconds. If ``max_delay <= 0``, no
            cap is applied.

    Returns:
        The capped strategy, or ``strategy`` itself if no cap applies.

    Example:
        ```pycon
        >>> from aretry.backoff import cap, constant
        >>> base = constant(2.0)
        >>> cap(base, 1.0).delay(1, start=0.0)
        1.0
        >>> cap(base, 0) is base
        True

        ```
    """
    validate_number("max_delay", max_delay)
    if max_delay <= 0:
        return strategy
    return CapBackoff(strategy=strategy, max_delay=max_delay)
