r"""Error handler types and ready-made handlers for observability.

Error handlers are the hook through which retry cycles report intermediate
failures. A handler is called after an attempt failed and the strategy
decided to retry, before the cycle starts waiting. It receives the attempt
number (1-indexed), the upcoming delay in seconds, and the exception.

Example:
    ```pycon
    >>> from aretry import RetryCycle
    >>> from aretry.backoff import constant
    >>> def print_error(attempt, delay, error):
    ...     print(f"attempt #{attempt}: {error} => wait {delay * 1000:.0f} ms")
    ...
    >>> cycle = RetryCycle(constant(0.001)).on_error(print_error)
    >>> def attempt(n):
    ...     if n < 3:
    ...         raise RuntimeError("failed")
    ...     return "done"
    ...
    >>> cycle.run(attempt)
    attempt #1: failed => wait 1 ms
    attempt #2: failed => wait 1 ms
    'done'

    ```
"""

from __future__ import annotations

__all__ = ["ErrorHandler", "log_error"]

import logging
from collections.abc import Callable
from typing import TypeAlias

from aretry.utils.structured_logging import log_structured

ErrorHandler: TypeAlias = Callable[[int, float, Exception], None]

logger: logging.Logger = logging.getLogger(__name__)


def log_error(
    target: logging.Logger | None = None,
    level: int = logging.WARNING,
) -> ErrorHandler:
    """Create an error handler that logs every retried failure.

    The record carries the structured fields ``attempt``, ``delay`` and
    ``error_type``, which ``StructuredFormatter`` renders as JSON keys.

    Args:
        target: The logger to write to. Defaults to the ``aretry.callbacks``
            logger.
        level: The log level of the records.

    Returns:
        The error handler, to be registered with ``RetryCycle.on_error``.

    Example:
        ```pycon
        >>> import logging
        >>> from aretry import RetryCycle
        >>> from aretry.backoff import constant
        >>> from aretry.callbacks import log_error
        >>> cycle = RetryCycle(constant(1.0)).on_error(
        ...     log_error(logging.getLogger("my.service"), level=logging.INFO)
        ... )

        ```
    """
    out = target if target is not None else logger

    def handler(attempt: int, delay: float, error: Exception) -> None:
        log_structured(
            out,
            level,
            f"Attempt #{attempt} failed with {error!r}, retrying in {delay:.3f}s",
            attempt=attempt,
            delay=delay,
            error_type=type(error).__name__,
        )

    return handler
