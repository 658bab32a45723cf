"""Input validation for Roster.

This module provides validation functions for form input.
All validators raise ValidationError with descriptive messages.

CRITICAL: This module must have NO UI dependencies.
"""

from __future__ import annotations

from typing import Any, Dict, Union

from .models import Part


class ValidationError(ValueError):
    """Validation error with field and message attributes."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def __repr__(self) -> str:
        return f"ValidationError(field='{self.field}', message='{self.message}')"


__all__ = [
    "ValidationError",
    "validate_name",
    "validate_age",
    "parse_age",
    "validate_part",
    "validate_record_id",
    "validate_new_record",
]


def validate_name(name: str, field_name: str = "name") -> str:
    """Validate a member name. Returns the stripped name."""
    if not isinstance(name, str):
        raise ValidationError(field_name, f"must be a string, got {type(name).__name__}")
    name = name.strip()
    if not name:
        raise ValidationError(field_name, "cannot be empty")
    return name


def parse_age(text: Union[str, int], field_name: str = "age") -> int:
    """Parse age text into an integer without range checks.

    This is what the edit form needs while the user is still typing.
    """
    if isinstance(text, bool):
        raise ValidationError(field_name, "must be an integer")
    if isinstance(text, int):
        return text
    if not isinstance(text, str):
        raise ValidationError(field_name, f"must be a string, got {type(text).__name__}")
    stripped = text.strip()
    if not stripped:
        raise ValidationError(field_name, "cannot be empty")
    try:
        return int(stripped, 10)
    except ValueError:
        raise ValidationError(field_name, f"'{text}' is not an integer") from None


def validate_age(text: Union[str, int], field_name: str = "age") -> int:
    """Parse age text and require a positive integer."""
    age = parse_age(text, field_name)
    if age <= 0:
        raise ValidationError(field_name, f"must be a positive integer, got {age}")
    return age


def validate_part(value: Union[str, Part], field_name: str = "part") -> Part:
    """Parse a part name (case-insensitive) into a Part."""
    if isinstance(value, Part):
        return value
    if not isinstance(value, str):
        raise ValidationError(field_name, f"must be a string, got {type(value).__name__}")
    normalized = value.strip().lower()
    if not normalized:
        raise ValidationError(field_name, "cannot be empty")
    try:
        return Part(normalized)
    except ValueError:
        allowed = ", ".join(p.value for p in Part)
        raise ValidationError(field_name, f"'{value}' is not one of: {allowed}") from None


def validate_record_id(value: Union[str, int], field_name: str = "id") -> int:
    """Validate a record ID given as int or decimal text."""
    record_id = parse_age(value, field_name)
    if record_id < 0:
        raise ValidationError(field_name, f"must not be negative, got {record_id}")
    return record_id


def validate_new_record(name: str, age: Union[str, int], part: Union[str, Part]) -> Dict[str, Any]:
    """Validate create/update form values and build the request body.

    Returns:
        Dict ready to be sent as JSON: {"name", "age", "part"}
    """
    return {
        "name": validate_name(name),
        "age": validate_age(age),
        "part": validate_part(part).value,
    }
