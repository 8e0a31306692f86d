r"""Structured logging utilities for machine-readable retry logs.

The formatter below renders each log record as one JSON object, including
the structured fields passed through ``extra`` and an optional correlation
ID. It is opt-in: attach it to a handler of the ``aretry`` logger (or of
any logger fed by ``aretry.callbacks.log_error``).

Example:
    ```python
    import logging

    from aretry import RetryCycle
    from aretry.backoff import exponential
    from aretry.callbacks import log_error
    from aretry.utils.structured_logging import (
        StructuredFormatter,
        clear_correlation_id,
        set_correlation_id,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.getLogger("aretry").addHandler(handler)

    cycle = RetryCycle(exponential(0.1, 2.0)).with_limit(5).on_error(log_error())
    set_correlation_id("job-42")
    try:
        cycle.run(sync_inventory)
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

# Context variable, so the ID follows threads and asyncio tasks independently
_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aretry_correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Returns:
        The current correlation ID, or None if not set.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID of the current context.

    Args:
        correlation_id: The ID tying related log entries together, e.g. a
            job or request ID.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("job-42")
        >>> get_correlation_id()
        'job-42'
        >>> clear_correlation_id()
        >>> get_correlation_id() is None
        True

        ```
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID of the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Every record becomes a JSON object with the keys ``timestamp`` (ISO
    8601, UTC, millisecond precision), ``level``, ``logger``, ``message``,
    ``module``, ``function`` and ``line``, plus ``correlation_id`` when one
    is set, ``exception`` when the record carries exception info, and every
    field passed through ``extra``. Values that are not JSON serializable
    are rendered with ``repr``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord("aretry", logging.INFO, "", 0, "retrying", None, None)
        >>> record.attempt = 2
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["message"], data["attempt"]
        ('retrying', 2)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            data["correlation_id"] = correlation_id

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES:
                data[key] = value

        return json.dumps(data, default=repr)

    def formatTime(  # noqa: N802
        self, record: logging.LogRecord, datefmt: str | None = None  # noqa: ARG002
    ) -> str:
        """Format the record creation time as ISO 8601 in UTC."""
        stamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        return f"{stamp}.{int(record.msecs):03d}Z"


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **fields: Any,
) -> None:
    """Log a message with structured fields.

    Args:
        logger: The logger to use.
        level: The log level, e.g. ``logging.INFO``.
        message: The log message.
        **fields: Structured fields attached to the record. They must not
            clash with ``LogRecord`` attributes.
    """
    logger.log(level, message, extra=fields)
