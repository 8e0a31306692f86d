r"""Linear backoff strategy."""

from __future__ import annotations

__all__ = ["LinearBackoff", "linear"]

from dataclasses import dataclass

from aretry.backoff.base import BaseBackoffStrategy, Delay
from aretry.backoff.constant import ConstantBackoff
from aretry.utils.validation import validate_non_negative, validate_number


@dataclass(frozen=True)
class LinearBackoff(BaseBackoffStrategy):
    """Linear backoff strategy.

    Calculates delay as: max(0, initial_delay + slope * (attempt - 1)).

    A positive slope produces evenly growing delays, a negative slope
    shrinking ones. The result never drops below zero.

    Args:
        initial_delay: The delay in seconds after the first attempt.
            Must be non-negative.
        slope: The amount in seconds added per attempt. Can be negative.

    Raises:
        ValueError: If initial_delay is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import LinearBackoff
        >>> backoff = LinearBackoff(initial_delay=1.0, slope=0.5)
        >>> backoff.delay(1, start=0.0)
        1.0
        >>> backoff.delay(3, start=0.0)
        2.0
        >>> LinearBackoff(initial_delay=1.0, slope=-0.5).delay(5, start=0.0)
        0.0

        ```
    """

    initial_delay: float
    slope: float

    def __post_init__(self) -> None:
        validate_non_negative("initial_delay", self.initial_delay)
        validate_number("slope", self.slope)

    def delay(self, attempt: int, start: float) -> Delay:  # noqa: ARG002
        return max(0.0, self.initial_delay + self.slope * (attempt - 1))


def linear(d: float, k: float) -> BaseBackoffStrategy:
    """Create a strategy whose delays grow (``k > 0``) or shrink
    (``k < 0``) linearly, starting from ``d``.

    Args:
        d: The delay in seconds after the first attempt. Must be
            non-negative.
        k: The slope in seconds per attempt.

    Returns:
        The linear strategy, or a constant strategy if ``k == 0``.

    Raises:
        ValueError: If ``d`` is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import linear
        >>> linear(1.0, 0.0)
        ConstantBackoff(interval=1.0)

        ```
    """
    validate_number("slope", k)
    if k == 0:
        return ConstantBackoff(d)
    return LinearBackoff(initial_delay=d, slope=k)
