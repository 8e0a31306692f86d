r"""Retry package implementing the retry cycle state machine.

Public API:
    - RetryCycle: Runs attempts according to a backoff strategy
    - CycleConfig: Validated decorator settings for a cycle
    - CallbackManager: Ordered collection of error handlers
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_SPREAD",
    "CallbackManager",
    "CycleConfig",
    "RetryCycle",
]

from aretry.retry.config import DEFAULT_SPREAD, CycleConfig
from aretry.retry.cycle import RetryCycle
from aretry.retry.manager import CallbackManager
