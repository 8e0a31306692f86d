r"""Configuration dataclass and defaults for retry cycles.

A ``CycleConfig`` gathers the decorator settings of a ``RetryCycle`` in a
single validated value, so they can be loaded from application settings
and applied in one call.
"""

from __future__ import annotations

__all__ = ["DEFAULT_SPREAD", "CycleConfig"]

from dataclasses import asdict, dataclass, replace
from typing import Any

from aretry.utils.validation import (
    validate_max_attempts,
    validate_positive,
    validate_spread,
)

# No jitter unless asked for
DEFAULT_SPREAD = 0.0


@dataclass(frozen=True)
class CycleConfig:
    """Configuration of the decorators applied by a ``RetryCycle``.

    Unset fields leave the corresponding decorator out. When applied with
    ``RetryCycle.configure``, decorators are layered in the fixed order
    jitter, cap, limit, timeout: the cap bounds jittered delays, and the
    limit and timeout short-circuit everything beneath them.

    Args:
        max_delay: Optional maximum delay in seconds. Must be > 0 if
            provided.
        spread: Jitter spread factor in [0, 1). 0 disables jitter.
        max_attempts: Optional maximum number of attempts per cycle. Must
            be >= 1 if provided.
        max_duration: Optional maximum duration of a cycle in seconds. Must
            be > 0 if provided.

    Raises:
        ValueError: If any parameter fails validation.

    Example:
        ```pycon
        >>> from aretry.retry.config import CycleConfig
        >>> config = CycleConfig(max_attempts=5)
        >>> config.max_attempts
        5
        >>> merged = config.merge(max_delay=2.0)
        >>> merged.max_delay, merged.max_attempts
        (2.0, 5)
        >>> config.max_delay is None  # Original unchanged
        True

        ```
    """

    max_delay: float | None = None
    spread: float = DEFAULT_SPREAD
    max_attempts: int | None = None
    max_duration: float | None = None

    def __post_init__(self) -> None:
        validate_spread(self.spread)
        if self.max_delay is not None:
            validate_positive("max_delay", self.max_delay)
        if self.max_attempts is not None:
            validate_max_attempts(self.max_attempts)
        if self.max_duration is not None:
            validate_positive("max_duration", self.max_duration)

    def merge(self, **overrides: Any) -> CycleConfig:
        """Create a new config with the given fields overridden.

        Only non-None overrides are applied.

        Args:
            **overrides: Field values to override.

        Returns:
            A new, validated ``CycleConfig``.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary.

        Returns:
            The field values keyed by field name.
        """
        return asdict(self)
