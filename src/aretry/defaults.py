r"""Default time and randomness sources.

Strategies and cycles never reach for the clock or the random number
generator on their own. They receive them as plain callables, and fall back
to the sources below when the caller does not provide one. Tests pass
deterministic stubs instead.
"""

from __future__ import annotations

__all__ = ["default_clock", "default_random"]

import random
import time

# Monotonic so that elapsed time is immune to wall-clock adjustments
default_clock = time.monotonic

default_random = random.Random().random  # noqa: S311
