r"""Backoff strategies and decorators for retry delays.

This package provides the base strategies (constant, linear, exponential)
and the decorators that wrap them (cap, jitter, limit, timeout). Decorators
share the strategy interface, so they can be chained freely, e.g.
``timeout(cap(jitter(exponential(0.1, 2.0), 0.2), 5.0), 30.0)``.
"""

from __future__ import annotations

__all__ = [
    "EXIT",
    "MAX_DELAY",
    "ONCE",
    "RESOLUTION",
    "BackoffDecorator",
    "BaseBackoffStrategy",
    "CapBackoff",
    "Clock",
    "ConstantBackoff",
    "Delay",
    "ExitSignal",
    "ExponentialBackoff",
    "JitterBackoff",
    "LimitBackoff",
    "LinearBackoff",
    "OnceBackoff",
    "RandomSource",
    "TimeoutBackoff",
    "cap",
    "constant",
    "exponential",
    "jitter",
    "limit",
    "linear",
    "timeout",
]

from aretry.backoff.base import (
    EXIT,
    MAX_DELAY,
    RESOLUTION,
    BackoffDecorator,
    BaseBackoffStrategy,
    Clock,
    Delay,
    ExitSignal,
    RandomSource,
)
from aretry.backoff.cap import CapBackoff, cap
from aretry.backoff.constant import ONCE, ConstantBackoff, OnceBackoff, constant
from aretry.backoff.exponential import ExponentialBackoff, exponential
from aretry.backoff.jitter import JitterBackoff, jitter
from aretry.backoff.limit import LimitBackoff, limit
from aretry.backoff.linear import LinearBackoff, linear
from aretry.backoff.timeout import TimeoutBackoff, timeout
