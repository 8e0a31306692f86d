r"""Backoff decorator randomly spreading the delays of another strategy."""

from __future__ import annotations

__all__ = ["JitterBackoff", "jitter"]

from dataclasses import dataclass, field

from aretry.backoff.base import (
    EXIT,
    RESOLUTION,
    BackoffDecorator,
    BaseBackoffStrategy,
    Delay,
    RandomSource,
)
from aretry.defaults import default_random
from aretry.utils.validation import validate_spread


@dataclass(frozen=True)
class JitterBackoff(BackoffDecorator):
    """Randomly scatter the delays of the wrapped strategy.

    For a wrapped delay ``d`` and ``w = spread * d``, the jittered delay is
    ``d - w + random() * (2 * w + RESOLUTION)``. It therefore falls in
    ``[d * (1 - spread), d * (1 + spread) + RESOLUTION]``. ``EXIT`` is never
    perturbed.

    Spreading the delays of many clients that failed at the same moment
    keeps them from retrying in lockstep.

    Args:
        strategy: The wrapped strategy.
        spread: The relative range in which delays are scattered. Must lie
            in the half-open interval [0, 1). A spread of 0.5 results in
            delays ranging between 50% below and 50% above the wrapped
            delay.
        random: Source of uniform samples in [0, 1).

    Raises:
        ValueError: If spread is outside [0, 1).

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff, JitterBackoff
        >>> backoff = JitterBackoff(ConstantBackoff(1.0), spread=0.5, random=lambda: 0.5)
        >>> round(backoff.delay(1, start=0.0), 6)
        1.0

        ```
    """

    strategy: BaseBackoffStrategy
    spread: float
    random: RandomSource = field(default=default_random, compare=False)

    def __post_init__(self) -> None:
        validate_spread(self.spread)

    def delay(self, attempt: int, start: float) -> Delay:
        delay = self.strategy.delay(attempt, start)
        if delay is EXIT:
            return EXIT
        w = delay * self.spread
        return delay - w + self.random() * (2 * w + RESOLUTION)


def jitter(
    strategy: BaseBackoffStrategy,
    spread: float,
    random: RandomSource | None = None,
) -> BaseBackoffStrategy:
    """Wrap a strategy to randomly spread its delays around in time.

    Args:
        strategy: The strategy to wrap.
        spread: The relative range in which delays are scattered. Must lie
            in the half-open interval [0, 1). If ``spread == 0``, no jitter
            is applied.
        random: Source of uniform samples in [0, 1). Defaults to
            ``aretry.defaults.default_random``.

    Returns:
        The jittered strategy, or ``strategy`` itself if no jitter applies.

    Raises:
        ValueError: If spread is outside [0, 1).

    Example:
        ```pycon
        >>> from aretry.backoff import constant, jitter
        >>> base = constant(1.0)
        >>> round(jitter(base, 0.25, random=lambda: 0.25).delay(1, start=0.0), 6)
        0.875
        >>> jitter(base, 0.0) is base
        True

        ```
    """
    validate_spread(spread)
    if spread == 0:
        return strategy
    return JitterBackoff(
        strategy=strategy,
        spread=spread,
        random=random if random is not None else default_random,
    )
