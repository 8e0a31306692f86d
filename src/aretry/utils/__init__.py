r"""Utility functions for retry configuration and logging.

This package provides parameter validation for backoff strategies and
structured (JSON) logging helpers.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
    "validate_max_attempts",
    "validate_non_negative",
    "validate_number",
    "validate_positive",
    "validate_spread",
]

from aretry.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
from aretry.utils.validation import (
    validate_max_attempts,
    validate_non_negative,
    validate_number,
    validate_positive,
    validate_spread,
)
