"""
Lesson validators.

LessonIdValidator guards restore/purge/trash requests against malformed
identifiers. LessonValidator reports records whose scheduling fields look
wrong; stores log its findings but keep such lessons, since any lesson
with a well-formed id may move through the trash.
"""

from typing import Any, Dict

from .validators import Validator, ValidationResult


class InvalidLessonIdError(ValueError):
    """Raised when a lesson identifier is empty or not a string."""
    pass


class LessonIdValidator(Validator):
    """
    Validator for lesson identifiers.

    Examples:
        >>> LessonIdValidator().validate("lesson_001").is_valid
        True
        >>> LessonIdValidator().validate("  ").is_valid
        False
    """

    def validate(self, data: Any) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        # Ids are opaque; any non-blank string is accepted
        error = self.validate_string_length(data, "lesson_id", min_length=1)
        if error:
            return result.add_error(error)

        if not data.strip():
            result.add_error("lesson_id must not be blank")

        return result


def ensure_lesson_id(lesson_id: Any) -> str:
    """
    Check a lesson identifier before a request is dispatched.

    Args:
        lesson_id: Identifier received from the presentation layer

    Returns:
        The identifier, unchanged

    Raises:
        InvalidLessonIdError: If the identifier is malformed
    """
    result = LessonIdValidator().validate(lesson_id)
    if not result.is_valid:
        raise InvalidLessonIdError(
            f"Invalid lesson id {lesson_id!r}: {'; '.join(result.errors)}"
        )
    return lesson_id


class LessonValidator(Validator):
    """
    Validator for lesson records.

    Validates:
    - Required fields
    - Date and time formats
    - Reference identifiers

    Examples:
        >>> validator = LessonValidator()
        >>> result = validator.validate({
        ...     "id": "lesson_001",
        ...     "student_id": "stu_12",
        ...     "instructor_id": "ins_3",
        ...     "date": "2024-01-15",
        ...     "time": "09:00",
        ... })
        >>> result.is_valid
        True
    """

    REQUIRED_FIELDS = ["id", "student_id", "instructor_id", "date", "time"]

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, self.REQUIRED_FIELDS):
            result.add_error(error)

        if not result.is_valid:
            return result

        for error in LessonIdValidator().validate(data["id"]).errors:
            result.add_error(error)

        for name in ("student_id", "instructor_id"):
            error = self.validate_string_length(data[name], name, min_length=1)
            if error:
                result.add_error(error)

        error = self.validate_date_format(data["date"], "date")
        if error:
            result.add_error(error)

        error = self.validate_time_format(data["time"], "time")
        if error:
            result.add_error(error)

        # Room is required when scheduling, but old rows may lack it
        if data.get("room_id") in (None, ""):
            result.add_warning(f"Lesson {data['id']} has no room assigned")

        end_time = data.get("end_time")
        if end_time:
            error = self.validate_time_format(end_time, "end_time")
            if error:
                result.add_warning(error)
            elif isinstance(data["time"], str) and end_time <= data["time"]:
                result.add_warning(
                    f"end_time {end_time} is not after time {data['time']}"
                )

        return result
