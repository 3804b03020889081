"""
Trash view models.

The trash view is a read-only projection of the deleted lessons, already
ordered and joined to display names, ready for a presentation layer.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


EMPTY_TRASH_TITLE = "The trash is empty"
EMPTY_TRASH_HINT = "Drag lessons to the trash can on the calendar to delete them."


@dataclass(frozen=True)
class TrashEntry:
    """
    One deleted lesson as shown in the trash list.

    Attributes:
        lesson_id: Identifier passed back to restore/purge
        student_name: Resolved student name or "Unknown Student"
        instructor_name: Resolved instructor name or "Unknown Instructor"
        date: Lesson date (YYYY-MM-DD)
        time: Start time (HH:MM)
        label: Human label, e.g. "Mon, Jan 15 at 09:00 with Ana Cruz"
        notes: Lesson notes, if any
    """

    lesson_id: str
    student_name: str
    instructor_name: str
    date: str
    time: str
    label: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class TrashView:
    """
    Ordered trash projection.

    An empty view is a valid state; hosts render empty_title and
    empty_hint for it instead of an empty table.
    """

    entries: Tuple[TrashEntry, ...] = field(default_factory=tuple)
    empty_title: str = EMPTY_TRASH_TITLE
    empty_hint: str = EMPTY_TRASH_HINT

    @property
    def is_empty(self) -> bool:
        """Check if there is nothing in the trash."""
        return len(self.entries) == 0

    @property
    def lesson_ids(self) -> list:
        """Lesson identifiers in display order."""
        return [entry.lesson_id for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
