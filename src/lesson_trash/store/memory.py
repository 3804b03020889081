"""
In-memory lesson store.

Holds lessons, students and instructors in dictionaries. Used by tests
and by hosts that keep their data in process.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from .interfaces import LessonStore, LessonNotFoundError
from ..models.lesson import (
    LessonData,
    StudentData,
    InstructorData,
    is_deleted,
    STATUS_DELETED,
    STATUS_SCHEDULED,
)
from ..models.result import Result


logger = logging.getLogger(__name__)


def mark_lesson_deleted(lesson: dict) -> None:
    """Set every deletion marker on a lesson record."""
    lesson["status"] = STATUS_DELETED
    lesson["deleted"] = True
    lesson["deleted_at"] = datetime.now(timezone.utc).isoformat()


def clear_lesson_deleted(lesson: dict) -> None:
    """Clear every deletion marker on a lesson record."""
    lesson["status"] = STATUS_SCHEDULED
    lesson["deleted"] = False
    lesson["deleted_at"] = None


class InMemoryLessonStore(LessonStore):
    """
    Dictionary-backed LessonStore.

    Fetches return deep copies, so callers always work on snapshots.

    Examples:
        >>> store = InMemoryLessonStore(lessons=[{"id": "a", ...}])
        >>> store.mark_deleted("a").is_success
        True
    """

    def __init__(
        self,
        lessons: Optional[Iterable[LessonData]] = None,
        students: Optional[Iterable[StudentData]] = None,
        instructors: Optional[Iterable[InstructorData]] = None
    ):
        self._lessons: Dict[str, dict] = {}
        for lesson in lessons or []:
            if not lesson.get("id"):
                logger.warning(f"Skipping lesson record without id: {lesson!r}")
                continue
            self._lessons[lesson["id"]] = dict(lesson)
        self._students: List[dict] = [dict(s) for s in (students or [])]
        self._instructors: List[dict] = [dict(i) for i in (instructors or [])]

    def fetch_lessons(self) -> Result[List[LessonData]]:
        return Result.success(copy.deepcopy(list(self._lessons.values())))

    def fetch_students(self) -> Result[List[StudentData]]:
        return Result.success(copy.deepcopy(self._students))

    def fetch_instructors(self) -> Result[List[InstructorData]]:
        return Result.success(copy.deepcopy(self._instructors))

    def mark_deleted(self, lesson_id: str) -> Result[None]:
        lesson = self._lessons.get(lesson_id)
        if lesson is None:
            return Result.failure(
                f"Cannot move lesson {lesson_id} to trash: not found",
                LessonNotFoundError(lesson_id)
            )

        if is_deleted(lesson):
            logger.debug(f"Lesson {lesson_id} already in trash")
            return Result.success(None, f"Lesson {lesson_id} already in trash")

        mark_lesson_deleted(lesson)
        logger.debug(f"Lesson {lesson_id} moved to trash")
        return Result.success(None, f"Lesson {lesson_id} moved to trash")

    def restore(self, lesson_id: str) -> Result[None]:
        lesson = self._lessons.get(lesson_id)
        if lesson is None:
            return Result.failure(
                f"Cannot restore lesson {lesson_id}: not found",
                LessonNotFoundError(lesson_id)
            )

        if not is_deleted(lesson):
            logger.debug(f"Lesson {lesson_id} is not in trash, nothing to restore")
            return Result.success(None, f"Lesson {lesson_id} is not in trash")

        clear_lesson_deleted(lesson)
        logger.debug(f"Lesson {lesson_id} restored")
        return Result.success(None, f"Lesson {lesson_id} restored")

    def purge(self, lesson_id: str) -> Result[None]:
        if self._lessons.pop(lesson_id, None) is None:
            logger.debug(f"Purge of unknown lesson {lesson_id} ignored")
            return Result.success(None, f"Lesson {lesson_id} already gone")

        logger.debug(f"Lesson {lesson_id} purged")
        return Result.success(None, f"Lesson {lesson_id} permanently deleted")
