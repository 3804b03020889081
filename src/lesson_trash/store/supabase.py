"""
Hosted database lesson store.

Talks to the school's Supabase project through its PostgREST API:

    GET    /rest/v1/lessons?select=*
    PATCH  /rest/v1/lessons?id=eq.<id>&status=neq.cancelled  {"status": "cancelled"}
    PATCH  /rest/v1/lessons?id=eq.<id>&status=eq.cancelled   {"status": "scheduled"}
    DELETE /rest/v1/lessons?id=eq.<id>

The hosted lessons table has no "deleted" status; trashed lessons are the
ones with status "cancelled". Fetched rows carry a `deleted` flag derived
from it.

Requests run through a circuit breaker; connection problems and 5xx
responses count as failures. Nothing is retried here.
"""

import logging
from datetime import timedelta
from typing import Any, List, Optional, Union

import httpx

from .interfaces import LessonStore, LessonStoreError, LessonNotFoundError
from ..models.lesson import (
    LessonData,
    StudentData,
    InstructorData,
    STATUS_SCHEDULED,
)
from ..models.result import Result
from ..resilience.circuit_breaker import CircuitBreaker, CircuitBreakerOpenError
from ..utils.config import Config, SecureString


logger = logging.getLogger(__name__)


class SupabaseLessonStore(LessonStore):
    """
    LessonStore backed by the hosted relational database.

    Examples:
        >>> with SupabaseLessonStore("https://xyz.supabase.co", SecureString(key)) as store:
        ...     result = store.restore("6f1c...")
        ...     if result.is_failure:
        ...         print(result.message)
    """

    LESSONS_TABLE = "lessons"
    STUDENTS_TABLE = "students"
    INSTRUCTORS_TABLE = "instructors"

    DELETED_STATUS = "cancelled"

    def __init__(
        self,
        url: str,
        api_key: Union[SecureString, str],
        timeout: float = 10,
        circuit_breaker: Optional[CircuitBreaker] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the store.

        Args:
            url: Project URL (without /rest/v1)
            api_key: API key sent as apikey and bearer token
            timeout: Request timeout in seconds
            circuit_breaker: Breaker to use (a default one is created if omitted)
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        key = api_key.get_value() if isinstance(api_key, SecureString) else api_key
        self.url = url.rstrip('/')
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            failure_threshold=3,
            timeout=timedelta(seconds=60),
            expected_exception=httpx.HTTPError,
            name="supabase"
        )
        self.client = httpx.Client(
            base_url=f"{self.url}/rest/v1",
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

        logger.info(f"SupabaseLessonStore initialized with url: {self.url}")

    @classmethod
    def from_config(cls, config: Config) -> 'SupabaseLessonStore':
        """Build a store from application configuration."""
        return cls(
            url=config.supabase_url,
            api_key=config.supabase_key,
            timeout=config.store_timeout,
            circuit_breaker=CircuitBreaker(
                failure_threshold=config.store_failure_threshold,
                timeout=timedelta(seconds=config.store_reset_timeout),
                expected_exception=httpx.HTTPError,
                name="supabase"
            ),
        )

    def close(self):
        """Close the underlying HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _send(self, method: str, table: str, **kwargs) -> httpx.Response:
        response = self.client.request(method, f"/{table}", **kwargs)
        if response.status_code >= 500:
            response.raise_for_status()
        return response

    def _request(self, method: str, table: str, **kwargs) -> Result[httpx.Response]:
        """Send one request; client errors (4xx) are left to the caller."""
        try:
            response = self.circuit_breaker.call(self._send, method, table, **kwargs)
        except CircuitBreakerOpenError as e:
            logger.warning(f"{method} {table} skipped: {e}")
            return Result.failure(f"Lesson store unavailable: {e}", e)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {table} failed: {e}")
            return Result.failure(f"{method} {table} failed: {e}", e)

        return Result.success(response)

    def _check_status(self, response: httpx.Response, action: str) -> Result[httpx.Response]:
        if response.is_success:
            return Result.success(response)

        detail = response.text
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            detail = payload["message"]

        logger.warning(f"{action} rejected by store: {response.status_code} {detail}")
        return Result.failure(
            f"{action} rejected by store ({response.status_code}): {detail}",
            LessonStoreError(detail)
        )

    def _select(self, table: str, columns: str, **filters) -> Result[List[Any]]:
        return (
            self._request("GET", table, params={"select": columns, **filters})
            .and_then(lambda r: self._check_status(r, f"Fetching {table}"))
            .map(lambda r: r.json())
        )

    def _set_status(
        self,
        lesson_id: str,
        status: str,
        status_filter: str,
        action: str,
        unchanged: str
    ) -> Result[None]:
        """
        Update the status of one lesson, guarded by its current status.

        Args:
            lesson_id: Lesson to update
            status: New status value
            status_filter: PostgREST condition the current status must meet
            action: Log and message prefix
            unchanged: Message used when the lesson exists but the guard
                left it alone

        Returns:
            Success when the row was updated or was already in the target
            state, LessonNotFoundError failure when no such lesson exists
        """
        result = self._request(
            "PATCH",
            self.LESSONS_TABLE,
            params={"id": f"eq.{lesson_id}", "status": status_filter},
            json={"status": status},
            headers={"Prefer": "return=representation"},
        ).and_then(lambda r: self._check_status(r, action))

        if result.is_failure:
            return Result.failure(result.message, result.error)

        try:
            rows = result.value.json()
        except ValueError as e:
            return Result.failure(f"{action} failed: unreadable store response", e)

        if rows:
            logger.info(f"{action}: lesson {lesson_id}")
            return Result.success(None, f"{action}: lesson {lesson_id}")

        existing = self._select(self.LESSONS_TABLE, "id,status", id=f"eq.{lesson_id}")
        if existing.is_failure:
            return Result.failure(existing.message, existing.error)

        if not existing.value:
            return Result.failure(
                f"{action} failed: lesson {lesson_id} not found",
                LessonNotFoundError(lesson_id)
            )

        logger.debug(f"{action} skipped: lesson {lesson_id} {unchanged}")
        return Result.success(None, f"Lesson {lesson_id} {unchanged}")

    def _from_row(self, row: dict) -> LessonData:
        lesson = dict(row)
        lesson["deleted"] = row.get("status") == self.DELETED_STATUS
        return lesson

    def fetch_lessons(self) -> Result[List[LessonData]]:
        return self._select(self.LESSONS_TABLE, "*").map(
            lambda rows: [self._from_row(row) for row in rows]
        )

    def fetch_students(self) -> Result[List[StudentData]]:
        return self._select(self.STUDENTS_TABLE, "id,name")

    def fetch_instructors(self) -> Result[List[InstructorData]]:
        return self._select(self.INSTRUCTORS_TABLE, "id,name")

    def mark_deleted(self, lesson_id: str) -> Result[None]:
        return self._set_status(
            lesson_id,
            self.DELETED_STATUS,
            f"neq.{self.DELETED_STATUS}",
            "Moved to trash",
            "already in trash"
        )

    def restore(self, lesson_id: str) -> Result[None]:
        return self._set_status(
            lesson_id,
            STATUS_SCHEDULED,
            f"eq.{self.DELETED_STATUS}",
            "Restored",
            "is not in trash"
        )

    def purge(self, lesson_id: str) -> Result[None]:
        result = self._request(
            "DELETE",
            self.LESSONS_TABLE,
            params={"id": f"eq.{lesson_id}"},
        )
        if result.is_failure:
            return Result.failure(result.message, result.error)

        # Deleting zero rows is still a success; 404 means the row is gone
        response = result.value
        if response.status_code == 404:
            return Result.success(None, f"Lesson {lesson_id} already gone")

        checked = self._check_status(response, "Permanent delete")
        if checked.is_failure:
            return Result.failure(checked.message, checked.error)

        logger.info(f"Permanently deleted lesson {lesson_id}")
        return Result.success(None, f"Lesson {lesson_id} permanently deleted")
