"""
Abstract interface for the persistent lesson store.

The lifecycle manager depends only on this interface; concrete stores
(in-memory, JSON file, hosted database) implement it, and tests can mock
it directly.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.lesson import LessonData, StudentData, InstructorData
from ..models.result import Result


class LessonStoreError(Exception):
    """Base class for errors reported by a lesson store."""
    pass


class LessonNotFoundError(LessonStoreError):
    """Raised (and reported in results) when a lesson id does not exist."""

    def __init__(self, lesson_id: str):
        super().__init__(f"Lesson not found: {lesson_id}")
        self.lesson_id = lesson_id


class LessonStore(ABC):
    """
    Abstract interface for the system of record.

    Every method returns a Result; implementations report failures
    instead of raising. The store is the authority on mutation outcomes:

    - mark_deleted / restore of an unknown id fail with LessonNotFoundError
    - purge of an unknown (or already purged) id succeeds as a no-op
    - a mutation touches only the addressed lesson
    """

    @abstractmethod
    def fetch_lessons(self) -> Result[List[LessonData]]:
        """
        Fetch every lesson, active and deleted.

        Returns:
            Result containing a snapshot list of lessons
        """
        pass

    @abstractmethod
    def fetch_students(self) -> Result[List[StudentData]]:
        """Fetch student references (id and name)."""
        pass

    @abstractmethod
    def fetch_instructors(self) -> Result[List[InstructorData]]:
        """Fetch instructor references (id and name)."""
        pass

    @abstractmethod
    def mark_deleted(self, lesson_id: str) -> Result[None]:
        """
        Set the deletion marker of a lesson (move it to the trash).

        Args:
            lesson_id: Lesson identifier

        Returns:
            Result with None on success, LessonNotFoundError on unknown id
        """
        pass

    @abstractmethod
    def restore(self, lesson_id: str) -> Result[None]:
        """
        Clear the deletion marker of a lesson.

        Args:
            lesson_id: Lesson identifier

        Returns:
            Result with None on success, LessonNotFoundError on unknown id
        """
        pass

    @abstractmethod
    def purge(self, lesson_id: str) -> Result[None]:
        """
        Remove a lesson permanently.

        Args:
            lesson_id: Lesson identifier

        Returns:
            Result with None on success, including when nothing was removed
        """
        pass
