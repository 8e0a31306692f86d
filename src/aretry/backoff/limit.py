r"""Backoff decorator bounding the number of attempts."""

from __future__ import annotations

__all__ = ["LimitBackoff", "limit"]

from dataclasses import dataclass

from aretry.backoff.base import EXIT, BackoffDecorator, BaseBackoffStrategy, Delay
from aretry.utils.validation import validate_max_attempts


@dataclass(frozen=True)
class LimitBackoff(BackoffDecorator):
    """Stop the retry cycle after the ``max_attempts``-th attempt.

    Args:
        strategy: The wrapped strategy.
        max_attempts: The maximum number of attempts in a cycle. Must be
            an integer >= 1.

    Raises:
        TypeError: If max_attempts is not an integer.
        ValueError: If max_attempts is lower than 1.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff, LimitBackoff
        >>> backoff = LimitBackoff(ConstantBackoff(1.0), max_attempts=3)
        >>> [backoff.delay(n, start=0.0) for n in range(1, 5)]
        [1.0, 1.0, EXIT, EXIT]

        ```
    """

    strategy: BaseBackoffStrategy
    max_attempts: int

    def __post_init__(self) -> None:
        validate_max_attempts(self.max_attempts)

    def delay(self, attempt: int, start: float) -> Delay:
        if attempt >= self.max_attempts:
            return EXIT
        return self.strategy.delay(attempt, start)


def limit(strategy: BaseBackoffStrategy, max_attempts: int) -> BaseBackoffStrategy:
    """Wrap a strategy to stop the retry cycle after ``max_attempts``
    attempts.

    Args:
        strategy: The strategy to wrap.
        max_attempts: The maximum number of attempts. If
            ``max_attempts < 1``, no limit is applied.

    Returns:
        The limited strategy, or ``strategy`` itself if no limit applies.
    """
    if max_attempts < 1:
        return strategy
    return LimitBackoff(strategy=strategy, max_attempts=max_attempts)
