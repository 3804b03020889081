"""
Unit tests for the Result completion signal.
"""

import pytest

from lesson_trash.models.result import Result, ResultStatus
from lesson_trash.store.interfaces import LessonNotFoundError, LessonStoreError


class TestResult:
    """Test cases for Result class."""

    def test_success_creation(self):
        """Test creating a successful result."""
        result = Result.success(["lesson_001"], "Fetched lessons")

        assert result.is_success
        assert not result.is_failure
        assert result.status == ResultStatus.SUCCESS
        assert result.value == ["lesson_001"]
        assert result.message == "Fetched lessons"
        assert result.error is None

    def test_success_without_value(self):
        """Test mutations succeed with no payload."""
        result = Result.success()

        assert result.is_success
        assert result.value is None

    def test_failure_creation(self):
        """Test creating a failure result."""
        error = LessonNotFoundError("lesson_404")
        result = Result.failure("Cannot restore lesson", error)

        assert result.is_failure
        assert result.status == ResultStatus.FAILURE
        assert result.value is None
        assert result.message == "Cannot restore lesson"
        assert result.error is error

    def test_failed_with_matches_error_type(self):
        """Test failed_with checks the error class, including subclasses."""
        result = Result.failure("gone", LessonNotFoundError("x"))

        assert result.failed_with(LessonNotFoundError)
        assert result.failed_with(LessonStoreError)
        assert not result.failed_with(TimeoutError)

    def test_failed_with_on_success(self):
        """Test failed_with is False for successes."""
        assert not Result.success(None).failed_with(LessonNotFoundError)

    def test_unwrap_success(self):
        """Test unwrapping successful result."""
        assert Result.success("data").unwrap() == "data"

    def test_unwrap_failure_raises(self):
        """Test unwrapping failure raises exception."""
        with pytest.raises(ValueError, match="Cannot unwrap failure result"):
            Result.failure("Store offline").unwrap()

    def test_unwrap_or(self):
        """Test unwrap_or with success and failure."""
        assert Result.success([1]).unwrap_or([]) == [1]
        assert Result.failure("Store offline").unwrap_or([]) == []

    def test_map_success(self):
        """Test mapping over successful result."""
        mapped = Result.success([3, 1, 2]).map(sorted)

        assert mapped.is_success
        assert mapped.value == [1, 2, 3]

    def test_map_failure_passes_through(self):
        """Test mapping over failure keeps message and error."""
        error = LessonStoreError("down")
        mapped = Result.failure("Store offline", error).map(len)

        assert mapped.is_failure
        assert mapped.message == "Store offline"
        assert mapped.error is error

    def test_map_with_exception(self):
        """Test mapping with function that raises exception."""
        mapped = Result.success(5).map(lambda x: 1 / 0)

        assert mapped.is_failure
        assert isinstance(mapped.error, ZeroDivisionError)

    def test_and_then_chains_on_success(self):
        """Test and_then runs the next request on success."""
        chained = Result.success("lesson_001").and_then(
            lambda lesson_id: Result.success(f"restored {lesson_id}")
        )

        assert chained.value == "restored lesson_001"

    def test_and_then_skips_on_failure(self):
        """Test and_then does not call func after a failure."""
        calls = []
        chained = Result.failure("Store offline").and_then(
            lambda value: calls.append(value) or Result.success(value)
        )

        assert chained.is_failure
        assert chained.message == "Store offline"
        assert calls == []
