r"""Parameter validation utilities for backoff strategies and retry
configuration.

Invalid parameters are programmer errors, so every function in this module
raises immediately instead of clamping the value.
"""

from __future__ import annotations

__all__ = [
    "validate_max_attempts",
    "validate_non_negative",
    "validate_number",
    "validate_positive",
    "validate_spread",
]

from numbers import Real


def validate_number(name: str, value: object) -> None:
    """Validate that a parameter is a real number.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check.

    Raises:
        TypeError: If value is not a real number. ``bool`` is rejected.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_number
        >>> validate_number("delay", 1.5)
        >>> validate_number("delay", "1.5")
        Traceback (most recent call last):
        ...
        TypeError: delay must be a real number, got str

        ```
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        msg = f"{name} must be a real number, got {type(value).__name__}"
        raise TypeError(msg)


def validate_non_negative(name: str, value: float) -> None:
    """Validate that a parameter is a non-negative real number.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check.

    Raises:
        TypeError: If value is not a real number.
        ValueError: If value is negative.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_non_negative
        >>> validate_non_negative("delay", 0.0)
        >>> validate_non_negative("delay", -1.0)
        Traceback (most recent call last):
        ...
        ValueError: delay must be non-negative, got -1.0

        ```
    """
    validate_number(name, value)
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ValueError(msg)


def validate_spread(spread: float) -> None:
    """Validate a jitter spread factor.

    Args:
        spread: The relative range in which delays are scattered. Must lie
            in the half-open interval [0, 1).

    Raises:
        TypeError: If spread is not a real number.
        ValueError: If spread is outside [0, 1).

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_spread
        >>> validate_spread(0.5)
        >>> validate_spread(1.0)
        Traceback (most recent call last):
        ...
        ValueError: spread must be in [0, 1), got 1.0

        ```
    """
    validate_number("spread", spread)
    if not 0.0 <= spread < 1.0:
        msg = f"spread must be in [0, 1), got {spread}"
        raise ValueError(msg)


def validate_positive(name: str, value: float) -> None:
    """Validate that a parameter is a strictly positive real number.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check.

    Raises:
        TypeError: If value is not a real number.
        ValueError: If value is zero or negative.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_positive
        >>> validate_positive("max_delay", 2.0)
        >>> validate_positive("max_delay", 0.0)
        Traceback (most recent call last):
        ...
        ValueError: max_delay must be > 0, got 0.0

        ```
    """
    validate_number(name, value)
    if not value > 0:
        msg = f"{name} must be > 0, got {value}"
        raise ValueError(msg)


def validate_max_attempts(max_attempts: int) -> None:
    """Validate a maximum number of attempts.

    Args:
        max_attempts: The value to check. Must be an integer >= 1.

    Raises:
        TypeError: If max_attempts is not an integer. ``bool`` is rejected.
        ValueError: If max_attempts is lower than 1.
    """
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        msg = f"max_attempts must be an integer, got {type(max_attempts).__name__}"
        raise TypeError(msg)
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)
