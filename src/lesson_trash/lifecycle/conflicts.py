"""
Slot conflict detection for restoring lessons.

A lesson coming back from the trash must not double-book its slot: no
other active lesson at the same date and time may share its instructor,
its room or its student.
"""

from typing import Any, Iterable, Mapping, Optional

from ..models.lesson import is_deleted
from .display import build_lookup, resolve_name, UNKNOWN_INSTRUCTOR, UNKNOWN_STUDENT


def find_conflict(
    lesson: Mapping[str, Any],
    lessons: Iterable[Mapping[str, Any]],
    students: Iterable[Mapping[str, Any]] = (),
    instructors: Iterable[Mapping[str, Any]] = ()
) -> Optional[str]:
    """
    Find the first active lesson that collides with `lesson`.

    Checks, in order: same instructor, same room, same student.

    Args:
        lesson: Lesson about to be placed back on the calendar
        lessons: Current lesson snapshot
        students: Student snapshot (for the message)
        instructors: Instructor snapshot (for the message)

    Returns:
        A message describing the conflict, or None when the slot is free
    """
    for other in lessons:
        if other.get("id") == lesson.get("id") or is_deleted(other):
            continue
        if other.get("date") != lesson.get("date") or other.get("time") != lesson.get("time"):
            continue

        if other.get("instructor_id") == lesson.get("instructor_id"):
            name = resolve_name(build_lookup(instructors), other.get("instructor_id"), UNKNOWN_INSTRUCTOR)
            return f"Instructor {name} is already scheduled at this time."

        room_id = other.get("room_id")
        if room_id is not None and room_id == lesson.get("room_id"):
            return f"Room {room_id} is already booked at this time."

        if other.get("student_id") == lesson.get("student_id"):
            name = resolve_name(build_lookup(students), other.get("student_id"), UNKNOWN_STUDENT)
            return f"Student {name} already has a lesson at this time."

    return None
