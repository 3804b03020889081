"""
Lesson, student and instructor records.

Records travel as plain dictionaries (the shape the store returns);
these TypedDicts document the keys and give static type checking.
"""

from typing import TypedDict, Literal, Optional, Mapping, Any


# "completed", "cancelled" and "rescheduled" come from the hosted lessons table
LessonStatus = Literal["scheduled", "deleted", "completed", "cancelled", "rescheduled"]

STATUS_SCHEDULED: LessonStatus = "scheduled"
STATUS_DELETED: LessonStatus = "deleted"


class _LessonRequired(TypedDict):
    id: str
    student_id: str
    instructor_id: str
    date: str
    time: str


class LessonData(_LessonRequired, total=False):
    """
    Scheduled lesson.

    Attributes:
        id: Unique lesson identifier
        student_id: Student identifier
        instructor_id: Instructor identifier
        date: Lesson date (YYYY-MM-DD)
        time: Start time (HH:MM)
        notes: Optional free-text notes
        room_id: Room number
        end_time: Optional end time (HH:MM)
        status: Lesson status; local stores use "deleted" for the trash
        deleted: Boolean deletion marker
        deleted_at: Tombstone timestamp (ISO 8601)

    Examples:
        >>> lesson: LessonData = {
        ...     "id": "lesson_001",
        ...     "student_id": "stu_12",
        ...     "instructor_id": "ins_3",
        ...     "date": "2024-01-15",
        ...     "time": "09:00",
        ...     "status": "deleted",
        ... }
    """

    notes: Optional[str]
    room_id: Optional[int]
    end_time: Optional[str]
    status: LessonStatus
    deleted: bool
    deleted_at: Optional[str]


class StudentData(TypedDict, total=False):
    """Student reference (only id and name are read here)."""

    id: str
    name: str


class InstructorData(TypedDict, total=False):
    """Instructor reference (only id and name are read here)."""

    id: str
    name: str


def is_deleted(lesson: Mapping[str, Any]) -> bool:
    """
    Check the deletion marker of a lesson.

    A lesson is in the trash when any of its markers is set: the
    `deleted` flag, a `deleted_at` tombstone, or status "deleted".

    Examples:
        >>> is_deleted({"id": "a", "deleted": True})
        True
        >>> is_deleted({"id": "b", "status": "scheduled"})
        False
    """
    if lesson.get("deleted_at"):
        return True
    if lesson.get("status") == STATUS_DELETED:
        return True
    return bool(lesson.get("deleted", False))


def sort_key(lesson: Mapping[str, Any]) -> tuple:
    """Display order key: date, then time (both zero-padded strings)."""
    return (lesson.get("date") or "", lesson.get("time") or "")
