"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Field checks shared by the lesson validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ValidationResult:
    """Errors and non-fatal warnings collected by a Validator."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """Record an error; the result becomes invalid. Returns self."""
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """Record a warning without affecting validity. Returns self."""
        self.warnings.append(message)
        return self

    @property
    def findings(self) -> List[str]:
        """Errors followed by warnings."""
        return self.errors + self.warnings


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate(); the helpers below return an error
    message, or None when the value passes.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: List[str]
    ) -> List[str]:
        """Return one error per missing or None field."""
        errors = []
        for name in required_fields:
            if name not in data or data[name] is None:
                errors.append(f"Missing required field: {name}")
        return errors

    def validate_date_format(
        self,
        date_str: Any,
        field_name: str = "date"
    ) -> Optional[str]:
        """Validate date format (YYYY-MM-DD)."""
        if not isinstance(date_str, str) or not re.match(r'^\d{4}-\d{2}-\d{2}$', date_str):
            return f"Invalid {field_name} format: {date_str} (expected YYYY-MM-DD)"
        return None

    def validate_time_format(
        self,
        time_str: Any,
        field_name: str = "time"
    ) -> Optional[str]:
        """Validate zero-padded 24h time format (HH:MM)."""
        if not isinstance(time_str, str) or not re.match(r'^([01]\d|2[0-3]):[0-5]\d$', time_str):
            return f"Invalid {field_name} format: {time_str} (expected HH:MM)"
        return None

    def validate_string_length(
        self,
        value: Any,
        field_name: str,
        min_length: int = 1
    ) -> Optional[str]:
        """
        Validate string type and minimum length.

        Returns:
            Error message if invalid, None if valid
        """
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"

        if len(value) < min_length:
            return f"{field_name} must be at least {min_length} characters, got {len(value)}"

        return None
