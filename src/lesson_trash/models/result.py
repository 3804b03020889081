"""
Result<T> completion signal for store requests.

Every call that reaches the lesson store (fetching snapshots, moving a
lesson to the trash, restoring or purging it) reports its outcome as a
Result instead of raising, so hosts can decide how to notify the user.
"""

from dataclasses import dataclass
from typing import Optional, Generic, TypeVar, Callable
from enum import Enum


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Outcome of a store request."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of an operation that may succeed or fail.

    Attributes:
        status: SUCCESS or FAILURE
        value: Payload on success (None for mutations and failures)
        error: Exception reported by the store, if any
        message: Human-readable description of the outcome

    Examples:
        >>> result = store.purge("lesson-42")
        >>> if result.is_failure:
        ...     notify(result.message)

        >>> lessons = store.fetch_lessons().unwrap_or([])
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the request succeeded."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the request failed."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T = None, message: Optional[str] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            value: Payload (omit for mutations)
            message: Optional description

        Returns:
            Result with SUCCESS status
        """
        return cls(
            status=ResultStatus.SUCCESS,
            value=value,
            message=message
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: Description of what went wrong
            error: Optional exception behind the failure

        Returns:
            Result with FAILURE status
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error
        )

    def failed_with(self, error_type: type) -> bool:
        """
        Check whether this is a failure caused by a given exception type.

        Args:
            error_type: Exception class to test against

        Returns:
            True if the result failed and its error is an instance of error_type
        """
        return self.is_failure and isinstance(self.error, error_type)

    def unwrap(self) -> T:
        """
        Return the payload.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the payload, or default when the result is a failure."""
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Apply func to the payload of a successful result.

        Failures pass through untouched. An exception raised by func turns
        into a failure result.

        Examples:
            >>> view = store.fetch_lessons().map(list_deleted)
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)

        try:
            return Result.success(func(self.value), self.message)
        except Exception as e:
            return Result.failure(str(e), e)

    def and_then(self, func: Callable[[T], 'Result[U]']) -> 'Result[U]':
        """
        Chain another store request on success.

        Args:
            func: Function taking the payload and returning a Result

        Returns:
            func's Result on success, the original failure otherwise
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)
        return func(self.value)
