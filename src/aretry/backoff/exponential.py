r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff", "exponential"]

from dataclasses import dataclass

from aretry.backoff.base import MAX_DELAY, BaseBackoffStrategy, Delay
from aretry.backoff.constant import ConstantBackoff
from aretry.utils.validation import validate_non_negative


@dataclass(frozen=True)
class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: initial_delay * (multiplier ** (attempt - 1)).

    Delays grow for ``multiplier > 1`` and shrink for ``multiplier < 1``.
    Growth saturates at ``MAX_DELAY``, the longest wait the runtime can
    represent, instead of overflowing.

    Args:
        initial_delay: The delay in seconds after the first attempt.
            Must be non-negative.
        multiplier: The growth factor between consecutive delays.
            Must be non-negative.

    Raises:
        ValueError: If initial_delay or multiplier is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(initial_delay=1.0, multiplier=2.0)
        >>> [backoff.delay(n, start=0.0) for n in range(1, 5)]
        [1.0, 2.0, 4.0, 8.0]
        >>> backoff = ExponentialBackoff(initial_delay=8.0, multiplier=0.5)
        >>> [backoff.delay(n, start=0.0) for n in range(1, 5)]
        [8.0, 4.0, 2.0, 1.0]

        ```
    """

    initial_delay: float
    multiplier: float

    def __post_init__(self) -> None:
        validate_non_negative("initial_delay", self.initial_delay)
        validate_non_negative("multiplier", self.multiplier)

    def delay(self, attempt: int, start: float) -> Delay:  # noqa: ARG002
        try:
            delay = self.initial_delay * self.multiplier ** (attempt - 1)
        except OverflowError:
            return MAX_DELAY
        return min(delay, MAX_DELAY)


def exponential(d: float, m: float) -> BaseBackoffStrategy:
    """Create a strategy whose delays grow (``m > 1``) or shrink
    (``m < 1``) exponentially by the factor ``m``, starting from ``d``.

    Args:
        d: The delay in seconds after the first attempt. Must be
            non-negative.
        m: The growth factor. Must be non-negative.

    Returns:
        The exponential strategy. Degenerate parameters collapse into a
        constant strategy: ``m == 1`` gives ``constant(d)``, and ``d == 0``
        or ``m == 0`` gives ``constant(0)``.

    Raises:
        ValueError: If ``d`` or ``m`` is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import exponential
        >>> exponential(1.0, 1.0)
        ConstantBackoff(interval=1.0)
        >>> exponential(0.0, 2.0)
        ConstantBackoff(interval=0.0)

        ```
    """
    validate_non_negative("initial_delay", d)
    validate_non_negative("multiplier", m)
    if d == 0 or m == 0:
        return ConstantBackoff(0.0)
    if m == 1:
        return ConstantBackoff(d)
    return ExponentialBackoff(initial_delay=d, multiplier=m)
