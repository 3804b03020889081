"""
JSON file lesson store.

Keeps the lessons, students and instructors tables in one JSON file
wrapped in a schema-versioned envelope:

    {"schema_version": "1.0",
     "data": {"lessons": [...], "students": [...], "instructors": [...]}}

Every call reads the file, so edits by other processes are picked up;
mutations rewrite the whole file.
"""

import logging
from pathlib import Path
from typing import Callable, List

from .interfaces import LessonStore, LessonStoreError
from .memory import InMemoryLessonStore
from ..models.lesson import LessonData, StudentData, InstructorData
from ..models.result import Result
from ..models.schema_version import VersionedData, CURRENT_VERSION
from ..utils.file_utils import load_json, save_json
from ..validation.lesson_validator import LessonValidator


logger = logging.getLogger(__name__)


class JsonFileLessonStore(LessonStore):
    """
    File-backed LessonStore.

    A missing file is an empty store; it is created on the first
    successful mutation.

    Examples:
        >>> store = JsonFileLessonStore(Path("data/lessons.json"))
        >>> lessons = store.fetch_lessons().unwrap_or([])
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.validator = LessonValidator()

    def _read(self) -> Result[InMemoryLessonStore]:
        try:
            raw = load_json(self.path)
        except (OSError, ValueError) as e:
            # ValueError covers both malformed JSON and undecodable bytes
            return Result.failure(
                f"Cannot read lesson file {self.path}: {e}",
                LessonStoreError(str(e))
            )

        if raw is None:
            raw = {}
        if not isinstance(raw, dict) or not isinstance(raw.get("data", {}), dict):
            return Result.failure(
                f"Cannot read lesson file {self.path}: expected a versioned snapshot object",
                LessonStoreError(f"malformed snapshot: {self.path}")
            )

        envelope = VersionedData.from_dict(raw)
        try:
            envelope.version_enum
        except ValueError as e:
            return Result.failure(
                f"Unsupported schema version {envelope.schema_version!r} in {self.path}",
                LessonStoreError(str(e))
            )

        tables = {}
        for name in ("lessons", "students", "instructors"):
            rows = envelope.data.get(name, [])
            if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
                return Result.failure(
                    f"Cannot read lesson file {self.path}: {name} must be a list of records",
                    LessonStoreError(f"malformed {name} table: {self.path}")
                )
            tables[name] = rows

        return Result.success(InMemoryLessonStore(**tables))

    def _write(self, tables: InMemoryLessonStore) -> Result[None]:
        data = {
            "lessons": tables.fetch_lessons().unwrap(),
            "students": tables.fetch_students().unwrap(),
            "instructors": tables.fetch_instructors().unwrap(),
        }
        envelope = VersionedData(schema_version=CURRENT_VERSION.value, data=data)

        if not save_json(envelope.to_dict(), self.path):
            return Result.failure(
                f"Cannot write lesson file {self.path}",
                LessonStoreError(f"write failed: {self.path}")
            )
        return Result.success(None)

    def _mutate(self, apply: Callable[[InMemoryLessonStore], Result[None]]) -> Result[None]:
        """Read the file, apply one mutation and write it back on success."""
        loaded = self._read()
        if loaded.is_failure:
            return Result.failure(loaded.message, loaded.error)

        tables = loaded.value
        outcome = apply(tables)
        if outcome.is_failure:
            logger.warning(outcome.message)
            return outcome

        written = self._write(tables)
        if written.is_failure:
            return written
        return outcome

    def fetch_lessons(self) -> Result[List[LessonData]]:
        def check(lessons):
            for lesson in lessons:
                report = self.validator.validate(lesson)
                if report.findings:
                    logger.debug(
                        f"Lesson {lesson.get('id')!r} in {self.path}: {'; '.join(report.findings)}"
                    )
            return lessons

        return self._read().and_then(lambda t: t.fetch_lessons()).map(check)

    def fetch_students(self) -> Result[List[StudentData]]:
        return self._read().and_then(lambda t: t.fetch_students())

    def fetch_instructors(self) -> Result[List[InstructorData]]:
        return self._read().and_then(lambda t: t.fetch_instructors())

    def mark_deleted(self, lesson_id: str) -> Result[None]:
        return self._mutate(lambda t: t.mark_deleted(lesson_id))

    def restore(self, lesson_id: str) -> Result[None]:
        return self._mutate(lambda t: t.restore(lesson_id))

    def purge(self, lesson_id: str) -> Result[None]:
        return self._mutate(lambda t: t.purge(lesson_id))
