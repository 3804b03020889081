"""
Unit tests for Circuit Breaker pattern.
"""

import time
from datetime import timedelta

import pytest

from lesson_trash.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitState,
    CircuitBreakerOpenError
)


class StoreDown(Exception):
    """Failure counted by the breakers under test."""
    pass


def failing_call():
    raise StoreDown("connection refused")


def open_breaker(cb: CircuitBreaker):
    for _ in range(cb.failure_threshold):
        with pytest.raises(StoreDown):
            cb.call(failing_call)


class TestCircuitBreaker:
    """Test cases for CircuitBreaker."""

    def test_initial_state_closed(self):
        """Test circuit breaker starts in CLOSED state."""
        cb = CircuitBreaker(failure_threshold=3)

        assert cb.is_closed
        assert not cb.is_open
        assert not cb.is_half_open
        assert cb.failure_count == 0

    def test_successful_call(self):
        """Test successful call passes arguments and result through."""
        cb = CircuitBreaker(failure_threshold=3, expected_exception=StoreDown)

        assert cb.call(lambda a, b=0: a + b, 1, b=2) == 3
        assert cb.failure_count == 0

    def test_failure_increments_count(self):
        """Test failure increments counter without opening."""
        cb = CircuitBreaker(failure_threshold=3, expected_exception=StoreDown)

        with pytest.raises(StoreDown):
            cb.call(failing_call)

        assert cb.failure_count == 1
        assert cb.state == CircuitState.CLOSED

    def test_unexpected_exception_not_counted(self):
        """Test exceptions outside expected_exception pass through uncounted."""
        cb = CircuitBreaker(failure_threshold=1, expected_exception=StoreDown)

        with pytest.raises(KeyError):
            cb.call(lambda: {}["missing"])

        assert cb.failure_count == 0
        assert cb.is_closed

    def test_open_circuit_blocks_calls(self):
        """Test OPEN circuit blocks calls."""
        cb = CircuitBreaker(failure_threshold=2, expected_exception=StoreDown)
        open_breaker(cb)

        assert cb.is_open
        with pytest.raises(CircuitBreakerOpenError):
            cb.call(lambda: "success")

    def test_success_after_timeout_closes_circuit(self):
        """Test a successful trial call after the timeout closes the circuit."""
        cb = CircuitBreaker(
            failure_threshold=2,
            timeout=timedelta(milliseconds=50),
            expected_exception=StoreDown
        )
        open_breaker(cb)

        time.sleep(0.1)

        assert cb.call(lambda: "recovered") == "recovered"
        assert cb.is_closed
        assert cb.failure_count == 0

    def test_failure_in_half_open_reopens_circuit(self):
        """Test failure in HALF_OPEN reopens circuit."""
        cb = CircuitBreaker(
            failure_threshold=2,
            timeout=timedelta(milliseconds=50),
            expected_exception=StoreDown
        )
        open_breaker(cb)

        time.sleep(0.1)

        with pytest.raises(StoreDown):
            cb.call(failing_call)

        assert cb.is_open

    def test_tuple_of_expected_exceptions(self):
        """Test several exception types can count as failures."""
        cb = CircuitBreaker(failure_threshold=2, expected_exception=(StoreDown, TimeoutError))

        with pytest.raises(StoreDown):
            cb.call(failing_call)
        with pytest.raises(TimeoutError):
            cb.call(lambda: (_ for _ in ()).throw(TimeoutError()))

        assert cb.is_open

    def test_reset_circuit(self):
        """Test manual circuit reset."""
        cb = CircuitBreaker(failure_threshold=2, expected_exception=StoreDown)
        open_breaker(cb)

        cb.reset()

        assert cb.is_closed
        assert cb.failure_count == 0
        assert cb.last_failure_time is None

    def test_get_state_info(self):
        """Test state information dictionary."""
        cb = CircuitBreaker(failure_threshold=5, expected_exception=StoreDown, name="supabase")

        with pytest.raises(StoreDown):
            cb.call(failing_call)

        info = cb.get_state_info()

        assert info["name"] == "supabase"
        assert info["state"] == "closed"
        assert info["failure_count"] == 1
        assert info["failure_threshold"] == 5
        assert info["last_failure_time"] is not None
