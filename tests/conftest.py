from __future__ import annotations

from unittest.mock import Mock

import pytest


class FakeClock:
    """Manually advanced clock for deterministic timeout tests."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SentinelError(Exception):
    """Error raised by failing test attempts."""


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at 100.0 seconds."""
    return FakeClock(100.0)


@pytest.fixture
def sentinel_error() -> SentinelError:
    """Create the error raised by failing test attempts."""
    return SentinelError("test")


@pytest.fixture
def mock_handler() -> Mock:
    """Create a mock error handler for testing callbacks.

    Returns:
        A Mock object that can be registered with ``RetryCycle.on_error``.
    """
    return Mock()
