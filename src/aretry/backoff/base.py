r"""Abstract base classes and shared types for backoff strategies."""

from __future__ import annotations

__all__ = [
    "EXIT",
    "MAX_DELAY",
    "RESOLUTION",
    "BackoffDecorator",
    "BaseBackoffStrategy",
    "Clock",
    "Delay",
    "ExitSignal",
    "RandomSource",
]

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import TypeAlias


class ExitSignal(Enum):
    """Marker returned by a strategy to stop the retry cycle.

    The enum has a single member, ``EXIT``. It is a distinct type so a
    computed delay can never be mistaken for it.
    """

    EXIT = "exit"

    def __repr__(self) -> str:
        return "EXIT"


EXIT = ExitSignal.EXIT

# A delay in seconds, or EXIT to stop retrying
Delay: TypeAlias = float | ExitSignal

# Returns the current time in seconds
Clock: TypeAlias = Callable[[], float]

# Returns a pseudo-random number in the half-open interval [0, 1)
RandomSource: TypeAlias = Callable[[], float]

# Longest wait the runtime can represent; exponential growth saturates here
MAX_DELAY: float = float(threading.TIMEOUT_MAX)

# Unit of resolution noise added by the jitter formula (one nanosecond)
RESOLUTION: float = 1e-9


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before the next attempt
    of a retry cycle. Strategies are stateless: the result only depends on
    the arguments and on parameters fixed at construction, so a single
    instance can be shared by any number of concurrent cycles.
    """

    @abstractmethod
    def delay(self, attempt: int, start: float) -> Delay:
        """Compute the delay after a failed attempt.

        Args:
            attempt: The number of the attempt that just failed (1-indexed).
                The first attempt of a cycle is ``attempt=1``.
            start: The time at which the retry cycle started, as returned
                by the cycle's clock.

        Returns:
            The delay in seconds before the next attempt, or ``EXIT`` if
            the cycle should stop.
        """


class BackoffDecorator(BaseBackoffStrategy):
    """Base class for strategies wrapping exactly one inner strategy.

    Subclasses are expected to declare a ``strategy`` field holding the
    wrapped strategy.
    """

    strategy: BaseBackoffStrategy

    def unwrap(self) -> BaseBackoffStrategy:
        """Return the innermost strategy of the decorator chain.

        Example:
            ```pycon
            >>> from aretry.backoff import cap, constant, limit
            >>> base = constant(1.0)
            >>> limit(cap(base, 0.5), 3).unwrap() is base
            True

            ```
        """
        inner = self.strategy
        while isinstance(inner, BackoffDecorator):
            inner = inner.strategy
        return inner
