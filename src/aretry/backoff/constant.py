r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ONCE", "ConstantBackoff", "OnceBackoff", "constant"]

from dataclasses import dataclass

from aretry.backoff.base import EXIT, BaseBackoffStrategy, Delay
from aretry.utils.validation import validate_non_negative


@dataclass(frozen=True)
class ConstantBackoff(BaseBackoffStrategy):
    """Constant/fixed backoff strategy.

    Returns the same delay after every failed attempt, regardless of the
    attempt number.

    Args:
        interval: The fixed delay in seconds. Must be non-negative.

    Raises:
        ValueError: If the delay is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(2.5)
        >>> backoff.delay(1, start=0.0)
        2.5
        >>> backoff.delay(10, start=0.0)
        2.5

        ```
    """

    interval: float

    def __post_init__(self) -> None:
        validate_non_negative("interval", self.interval)

    def delay(self, attempt: int, start: float) -> Delay:  # noqa: ARG002
        return self.interval


@dataclass(frozen=True)
class OnceBackoff(BaseBackoffStrategy):
    """Backoff strategy that always returns ``EXIT``.

    A cycle using it invokes the attempt exactly once. Mostly useful for
    testing.
    """

    def delay(self, attempt: int, start: float) -> Delay:  # noqa: ARG002
        return EXIT


ONCE = OnceBackoff()


def constant(d: float) -> ConstantBackoff:
    """Create a strategy that always returns the delay ``d``.

    Args:
        d: The fixed delay in seconds. Must be non-negative.

    Returns:
        The constant strategy.

    Raises:
        ValueError: If ``d`` is negative.
    """
    return ConstantBackoff(d)
