r"""Unit tests for BaseBackoffStrategy and shared backoff types."""

from __future__ import annotations

import threading
from dataclasses import FrozenInstanceError

import pytest

from aretry.backoff import (
    EXIT,
    MAX_DELAY,
    BaseBackoffStrategy,
    ExitSignal,
    cap,
    constant,
    jitter,
    limit,
    timeout,
)


def test_base_backoff_strategy_is_abstract() -> None:
    """Test that BaseBackoffStrategy cannot be instantiated directly."""
    with pytest.raises(TypeError, match=r"Can't instantiate abstract class"):
        BaseBackoffStrategy()  # type: ignore[abstract]


def test_custom_backoff_strategy() -> None:
    """Test creating a custom backoff strategy."""

    class CustomBackoff(BaseBackoffStrategy):
        def delay(self, attempt: int, start: float) -> float:
            return 10 * attempt + 5

    backoff = CustomBackoff()
    assert backoff.delay(1, 0.0) == 15
    assert backoff.delay(2, 0.0) == 25


def test_exit_is_single_member() -> None:
    """Test that EXIT is the only ExitSignal and is not a number."""
    assert list(ExitSignal) == [EXIT]
    assert not isinstance(EXIT, float)
    assert repr(EXIT) == "EXIT"


def test_max_delay_matches_runtime_limit() -> None:
    """Test that MAX_DELAY is the longest representable wait."""
    assert MAX_DELAY == threading.TIMEOUT_MAX


def test_strategies_are_immutable() -> None:
    """Test that strategies cannot be mutated after construction."""
    backoff = constant(1.0)
    with pytest.raises(FrozenInstanceError):
        backoff.interval = 2.0  # type: ignore[misc]


def test_strategies_are_value_objects() -> None:
    """Test that equal parameters produce equal strategies."""
    assert constant(1.0) == constant(1.0)
    assert cap(constant(1.0), 0.5) == cap(constant(1.0), 0.5)
    assert hash(limit(constant(1.0), 3)) == hash(limit(constant(1.0), 3))


def test_unwrap_decorator_chain() -> None:
    """Test that unwrap returns the innermost strategy."""
    base = constant(1.0)
    chain = timeout(cap(jitter(base, 0.2), 5.0), 30.0)
    assert chain.unwrap() is base


def test_strategy_shared_across_threads() -> None:
    """Test that a strategy returns the same values from many threads."""
    backoff = limit(cap(constant(2.0), 1.0), 50)
    results: list[list[object]] = []

    def sample() -> None:
        results.append([backoff.delay(n, 0.0) for n in range(1, 60)])

    threads = [threading.Thread(target=sample) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    expected = [1.0] * 49 + [EXIT] * 10
    assert results == [expected] * 8
