r"""Unit tests for ConstantBackoff strategy."""

from __future__ import annotations

import pytest

from aretry.backoff import EXIT, ONCE, ConstantBackoff, constant


def test_constant_backoff_basic() -> None:
    """Test that the delay is the same for every attempt."""
    backoff = ConstantBackoff(2.5)
    assert backoff.delay(1, 0.0) == 2.5
    assert backoff.delay(2, 0.0) == 2.5
    assert backoff.delay(100, 0.0) == 2.5


@pytest.mark.parametrize("d", [0.0, 0.001, 1.0, 3600.0])
@pytest.mark.parametrize("n", [1, 2, 10, 1000])
def test_constant_ignores_attempt_and_start(d: float, n: int) -> None:
    """Test that constant(d) returns d for any attempt and start time."""
    assert constant(d).delay(n, 12345.0) == d


def test_constant_backoff_zero_delay() -> None:
    """Test constant backoff with zero delay."""
    assert constant(0.0).delay(1, 0.0) == 0.0


def test_constant_backoff_invalid_delay() -> None:
    """Test that a negative delay raises ValueError."""
    with pytest.raises(ValueError, match=r"interval must be non-negative"):
        constant(-1.0)


def test_constant_backoff_invalid_type() -> None:
    """Test that a non-numeric delay raises TypeError."""
    with pytest.raises(TypeError, match=r"interval must be a real number"):
        constant("1.0")  # type: ignore[arg-type]


def test_once_always_exits() -> None:
    """Test that ONCE returns EXIT for every attempt."""
    assert ONCE.delay(1, 0.0) is EXIT
    assert ONCE.delay(5, 0.0) is EXIT
