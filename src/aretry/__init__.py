r"""aretry - Retry fallible operations with composable backoff strategies.

This package retries an operation according to a configurable delay policy
until it succeeds, is explicitly aborted, or a configured limit is reached.
It takes the delay math and the cancellation plumbing off the caller's
hands for network calls, flaky I/O and other transient failures.

Key Features:
    - Stateless backoff strategies: constant, linear, exponential
    - Composable decorators: cap, jitter, attempt limit, wall-clock timeout
    - Reusable retry cycles with ordered error handlers
    - Cooperative cancellation through thread-safe tokens, with deadlines
    - Terminal errors to stop retrying immediately
    - Sync and asyncio runs sharing the same configuration
    - Injectable clock and random sources for deterministic tests

Example:
    ```pycon
    >>> from aretry import RetryCycle, force_exit
    >>> from aretry.backoff import exponential
    >>> cycle = RetryCycle(exponential(0.001, 2.0)).with_cap(0.01).with_limit(5)
    >>> def attempt(n):
    ...     if n < 3:
    ...         raise ConnectionError("service unavailable")
    ...     return f"succeeded on attempt #{n}"
    ...
    >>> cycle.run(attempt)
    'succeeded on attempt #3'
    >>> def fatal(n):
    ...     raise force_exit(PermissionError("forbidden"))
    ...
    >>> cycle.run(fatal)
    Traceback (most recent call last):
        ...
    PermissionError: forbidden

    ```
"""

from __future__ import annotations

__all__ = [
    "EXIT",
    "CancellationToken",
    "CycleCancelledError",
    "CycleConfig",
    "DeadlineExceededError",
    "RetryCycle",
    "TerminalError",
    "__version__",
    "force_exit",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.backoff.base import EXIT
from aretry.cancellation import CancellationToken
from aretry.exceptions import (
    CycleCancelledError,
    DeadlineExceededError,
    TerminalError,
    force_exit,
)
from aretry.retry.config import CycleConfig
from aretry.retry.cycle import RetryCycle

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
