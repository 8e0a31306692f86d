r"""Unit tests for the timeout decorator."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from aretry.backoff import EXIT, TimeoutBackoff, constant, timeout
from aretry.defaults import default_clock

if TYPE_CHECKING:
    from tests.conftest import FakeClock


def test_timeout_before_limit(clock: FakeClock) -> None:
    """Test that the inner delay is returned before the limit."""
    backoff = timeout(constant(1.0), 2.0, clock)
    start = clock()
    clock.advance(1.0)
    assert backoff.delay(1, start) == 1.0


def test_timeout_at_limit(clock: FakeClock) -> None:
    """Test that reaching exactly the limit returns EXIT."""
    backoff = timeout(constant(1.0), 2.0, clock)
    start = clock()
    clock.advance(2.0)
    assert backoff.delay(1, start) is EXIT


def test_timeout_after_limit(clock: FakeClock) -> None:
    """Test that exceeding the limit returns EXIT."""
    backoff = timeout(constant(1.0), 2.0, clock)
    start = clock()
    clock.advance(3.5)
    assert backoff.delay(7, start) is EXIT


@pytest.mark.parametrize("limit", [0, 0.0, -2.0])
def test_timeout_disabled_returns_inner(limit: float, clock: FakeClock) -> None:
    """Test that a non-positive limit returns the inner strategy unchanged."""
    base = constant(1.0)
    assert timeout(base, limit, clock) is base


def test_timeout_relative_to_start(clock: FakeClock) -> None:
    """Test that the elapsed time is measured from the given start."""
    backoff = timeout(constant(1.0), 2.0, clock)
    clock.advance(10.0)
    assert backoff.delay(1, clock() - 1.0) == 1.0
    assert backoff.delay(1, clock() - 2.0) is EXIT


def test_timeout_default_clock() -> None:
    """Test that the default clock is used when none is given."""
    backoff = timeout(constant(1.0), 60.0)
    assert isinstance(backoff, TimeoutBackoff)
    assert backoff.clock is default_clock
    assert backoff.delay(1, default_clock()) == 1.0


@pytest.mark.parametrize("limit", [0, 0.0, -2.0])
def test_timeout_backoff_invalid_limit(limit: float, clock: FakeClock) -> None:
    """Test that direct construction rejects a non-positive limit."""
    with pytest.raises(ValueError, match=r"limit must be > 0"):
        TimeoutBackoff(constant(1.0), limit=limit, clock=clock)


def test_timeout_backoff_non_numeric_limit(clock: FakeClock) -> None:
    with pytest.raises(TypeError, match=r"limit must be a real number"):
        TimeoutBackoff(constant(1.0), limit="x", clock=clock)  # type: ignore[arg-type]
