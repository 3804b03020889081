"""
Lesson trash lifecycle.

Usage:
    >>> from lesson_trash.lifecycle import LessonLifecycleManager
    >>> from lesson_trash.store.memory import InMemoryLessonStore
    >>>
    >>> manager = LessonLifecycleManager(InMemoryLessonStore(lessons=lessons))
    >>> view = manager.refresh().unwrap()
"""

from .manager import (
    LessonLifecycleManager,
    RestoreConflictError,
    build_trash_view,
    list_deleted,
)
from .display import UNKNOWN_STUDENT, UNKNOWN_INSTRUCTOR, render_trash_text

__all__ = [
    "LessonLifecycleManager",
    "RestoreConflictError",
    "build_trash_view",
    "list_deleted",
    "render_trash_text",
    "UNKNOWN_STUDENT",
    "UNKNOWN_INSTRUCTOR",
]

__version__ = "0.1.0"
