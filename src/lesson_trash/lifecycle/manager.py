"""
Lesson lifecycle manager.

Owns the trash transitions of a lesson:

    ACTIVE  --(move_to_trash)--> DELETED
    DELETED --(restore)--------> ACTIVE
    DELETED --(purge)----------> PURGED   (terminal)

The manager holds no lesson state of its own. It builds the trash
projection from snapshots handed in by the host and forwards mutation
requests to the store, returning the store's Result unchanged. After a
mutation the host re-fetches (see refresh) to update its view.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from ..models.lesson import LessonData, is_deleted, sort_key
from ..models.result import Result
from ..models.trash import TrashEntry, TrashView
from ..store.interfaces import LessonStore, LessonNotFoundError
from ..validation.lesson_validator import ensure_lesson_id
from .conflicts import find_conflict
from .display import (
    build_lookup,
    resolve_name,
    format_when,
    UNKNOWN_STUDENT,
    UNKNOWN_INSTRUCTOR,
)


logger = logging.getLogger(__name__)


class RestoreConflictError(Exception):
    """Reported when a restored lesson would double-book its slot."""
    pass


def list_deleted(lessons: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """
    Deleted lessons ordered by date, then time.

    Pure function of its input. Both fields are zero-padded, so plain
    string comparison gives chronological order; the sort is stable.

    Examples:
        >>> lessons = [
        ...     {"id": "a", "date": "2024-02-01", "time": "10:00", "deleted": True},
        ...     {"id": "b", "date": "2024-02-01", "time": "09:00", "deleted": True},
        ...     {"id": "c", "date": "2024-01-01", "time": "23:59", "deleted": False},
        ... ]
        >>> [lesson["id"] for lesson in list_deleted(lessons)]
        ['b', 'a']
    """
    return sorted((lesson for lesson in lessons if is_deleted(lesson)), key=sort_key)


def build_trash_view(
    lessons: Iterable[Mapping[str, Any]],
    students: Iterable[Mapping[str, Any]],
    instructors: Iterable[Mapping[str, Any]]
) -> TrashView:
    """
    Build the display-joined trash projection.

    Lookup maps are built once for the snapshot; unresolved references
    fall back to "Unknown Student" / "Unknown Instructor".

    Args:
        lessons: Lesson snapshot (active and deleted)
        students: Student snapshot
        instructors: Instructor snapshot

    Returns:
        TrashView with entries in list_deleted order
    """
    student_map = build_lookup(students)
    instructor_map = build_lookup(instructors)

    entries = []
    for lesson in list_deleted(lessons):
        student_name = resolve_name(student_map, lesson.get("student_id"), UNKNOWN_STUDENT)
        instructor_name = resolve_name(instructor_map, lesson.get("instructor_id"), UNKNOWN_INSTRUCTOR)
        date = lesson.get("date") or ""
        time = lesson.get("time") or ""

        entries.append(TrashEntry(
            lesson_id=lesson.get("id") or "",
            student_name=student_name,
            instructor_name=instructor_name,
            date=date,
            time=time,
            label=format_when(date, time, instructor_name),
            notes=lesson.get("notes") or None,
        ))

    return TrashView(entries=tuple(entries))


class LessonLifecycleManager:
    """
    Mediates trash transitions between a presentation layer and a store.

    Examples:
        >>> manager = LessonLifecycleManager(store)
        >>> view = manager.refresh().unwrap()
        >>> for entry in view:
        ...     print(entry.student_name, entry.label)
        >>> result = manager.restore(view.lesson_ids[0])
        >>> if result.is_failure:
        ...     notify(result.message)
    """

    def __init__(self, store: LessonStore):
        """
        Initialize LessonLifecycleManager.

        Args:
            store: System of record for lessons
        """
        self.store = store

    list_deleted = staticmethod(list_deleted)
    build_trash_view = staticmethod(build_trash_view)

    def refresh(self) -> Result[TrashView]:
        """
        Fetch fresh snapshots from the store and build the trash view.

        Returns:
            Result containing the TrashView, or the first fetch failure
        """
        lessons = self.store.fetch_lessons()
        if lessons.is_failure:
            return Result.failure(lessons.message, lessons.error)

        students = self.store.fetch_students()
        if students.is_failure:
            return Result.failure(students.message, students.error)

        instructors = self.store.fetch_instructors()
        if instructors.is_failure:
            return Result.failure(instructors.message, instructors.error)

        view = build_trash_view(lessons.value, students.value, instructors.value)
        logger.debug(f"Trash view refreshed: {len(view)} lesson(s)")
        return Result.success(view)

    def move_to_trash(self, lesson_id: str) -> Result[None]:
        """
        Request a soft delete (ACTIVE -> DELETED).

        Raises:
            InvalidLessonIdError: If lesson_id is malformed
        """
        ensure_lesson_id(lesson_id)
        logger.info(f"Moving lesson {lesson_id} to trash")
        return self.store.mark_deleted(lesson_id)

    def restore(
        self,
        lesson_id: str,
        lessons: Optional[Iterable[LessonData]] = None,
        students: Iterable[Mapping[str, Any]] = (),
        instructors: Iterable[Mapping[str, Any]] = ()
    ) -> Result[None]:
        """
        Request a restore (DELETED -> ACTIVE).

        When the caller passes its current lesson snapshot, a lesson that
        is not in the trash is a no-op and a lesson whose slot is now
        taken is refused; neither reaches the store. Without a snapshot
        the store decides.

        Args:
            lesson_id: Lesson to restore
            lessons: Optional current lesson snapshot
            students: Student snapshot, used in conflict messages
            instructors: Instructor snapshot, used in conflict messages

        Returns:
            The store's Result, or a local no-op / conflict Result

        Raises:
            InvalidLessonIdError: If lesson_id is malformed
        """
        ensure_lesson_id(lesson_id)

        if lessons is not None:
            lessons = list(lessons)
            lesson = next((item for item in lessons if item.get("id") == lesson_id), None)

            if lesson is None or not is_deleted(lesson):
                logger.info(f"Lesson {lesson_id} is not in the trash; nothing to restore")
                return Result.success(None, f"Lesson {lesson_id} is not in the trash")

            conflict = find_conflict(lesson, lessons, students, instructors)
            if conflict:
                logger.info(f"Restore of lesson {lesson_id} refused: {conflict}")
                return Result.failure(
                    f"Could not restore lesson: {conflict}",
                    RestoreConflictError(conflict)
                )

        logger.info(f"Restoring lesson {lesson_id}")
        return self.store.restore(lesson_id)

    def purge(self, lesson_id: str) -> Result[None]:
        """
        Request permanent removal (DELETED -> PURGED).

        Purging a lesson that is already gone succeeds, so repeated
        clicks and stale views never surface an error.

        Raises:
            InvalidLessonIdError: If lesson_id is malformed
        """
        ensure_lesson_id(lesson_id)
        logger.info(f"Permanently deleting lesson {lesson_id}")

        result = self.store.purge(lesson_id)
        if result.failed_with(LessonNotFoundError):
            logger.debug(f"Lesson {lesson_id} was already purged")
            return Result.success(None, f"Lesson {lesson_id} already gone")
        return result

    @staticmethod
    def describe_purge(
        lesson_id: str,
        lessons: Iterable[Mapping[str, Any]],
        students: Iterable[Mapping[str, Any]]
    ) -> str:
        """
        Confirmation text shown before a permanent delete.

        Returns:
            e.g. "permanently delete lesson for Ben Reyes on 2024-01-15",
            or "" when the lesson is not in the snapshot
        """
        lesson = next((item for item in lessons if item.get("id") == lesson_id), None)
        if lesson is None:
            return ""

        student_name = resolve_name(build_lookup(students), lesson.get("student_id"), "Unknown")
        return f"permanently delete lesson for {student_name} on {lesson.get('date', '')}"
