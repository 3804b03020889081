"""
Circuit Breaker for calls to the hosted lesson store.

When the database keeps failing, further restore/purge requests are
refused immediately instead of each one waiting for a timeout.

States:
- CLOSED: Normal operation, calls pass through
- OPEN: Too many failures, calls are blocked
- HALF_OPEN: One trial call decides whether to close again
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Any, Optional, Type, Tuple, Union


logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpenError(Exception):
    """Raised when circuit breaker is in OPEN state."""
    pass


class CircuitBreaker:
    """
    Counts consecutive store failures and blocks calls past a threshold.

    Examples:
        >>> cb = CircuitBreaker(
        ...     name="supabase",
        ...     failure_threshold=3,
        ...     timeout=timedelta(seconds=60),
        ...     expected_exception=httpx.TransportError
        ... )
        >>> try:
        ...     response = cb.call(client.delete, "/rest/v1/lessons")
        ... except CircuitBreakerOpenError:
        ...     report_store_unavailable()
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        timeout: timedelta = timedelta(seconds=60),
        expected_exception: Union[Type[Exception], Tuple[Type[Exception], ...]] = Exception,
        name: str = "store"
    ):
        """
        Initialize circuit breaker.

        Args:
            failure_threshold: Number of failures before opening circuit
            timeout: Time to wait before a trial call (HALF_OPEN)
            expected_exception: Exception type(s) counted as failure
            name: Label used in log messages
        """
        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.expected_exception = expected_exception
        self.name = name

        self.failure_count = 0
        self.last_failure_time: Optional[datetime] = None
        self.state = CircuitState.CLOSED

        logger.debug(
            f"Circuit breaker '{name}' initialized: "
            f"threshold={failure_threshold}, timeout={timeout}"
        )

    def call(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute function with circuit breaker protection.

        Raises:
            CircuitBreakerOpenError: If circuit is OPEN
            Exception: Any exception raised by func
        """
        if self.state == CircuitState.OPEN:
            if self._should_attempt_reset():
                logger.info(f"Circuit breaker '{self.name}': entering HALF_OPEN state")
                self.state = CircuitState.HALF_OPEN
            else:
                raise CircuitBreakerOpenError(
                    f"Circuit breaker '{self.name}' is OPEN (failures: {self.failure_count})"
                )

        try:
            result = func(*args, **kwargs)
        except self.expected_exception:
            self._on_failure()
            raise

        self._on_success()
        return result

    def _should_attempt_reset(self) -> bool:
        """Check if enough time has passed to attempt reset."""
        if self.last_failure_time is None:
            return True

        return datetime.now() - self.last_failure_time > self.timeout

    def _on_success(self):
        if self.state == CircuitState.HALF_OPEN:
            logger.info(f"Circuit breaker '{self.name}': back to CLOSED state")
            self.state = CircuitState.CLOSED

        self.failure_count = 0

    def _on_failure(self):
        self.failure_count += 1
        self.last_failure_time = datetime.now()

        logger.warning(
            f"Circuit breaker '{self.name}': failure #{self.failure_count} "
            f"(threshold={self.failure_threshold})"
        )

        # A failed trial call reopens immediately
        if self.state == CircuitState.HALF_OPEN or self.failure_count >= self.failure_threshold:
            logger.error(
                f"Circuit breaker '{self.name}': OPEN after {self.failure_count} failures"
            )
            self.state = CircuitState.OPEN

    def reset(self):
        """Manually reset circuit breaker to CLOSED state."""
        logger.info(f"Circuit breaker '{self.name}': manual reset to CLOSED")
        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.last_failure_time = None

    @property
    def is_open(self) -> bool:
        """Check if circuit is OPEN."""
        return self.state == CircuitState.OPEN

    @property
    def is_closed(self) -> bool:
        """Check if circuit is CLOSED."""
        return self.state == CircuitState.CLOSED

    @property
    def is_half_open(self) -> bool:
        """Check if circuit is HALF_OPEN."""
        return self.state == CircuitState.HALF_OPEN

    def get_state_info(self) -> dict:
        """
        Get current circuit breaker state information.

        Returns:
            Dictionary with name, state, failure count and last failure time
        """
        return {
            "name": self.name,
            "state": self.state.value,
            "failure_count": self.failure_count,
            "last_failure_time": (
                self.last_failure_time.isoformat()
                if self.last_failure_time
                else None
            ),
            "failure_threshold": self.failure_threshold,
        }
