"""Data models for Roster.

This module defines the Part enumeration and the immutable Record entity,
together with the conversion to and from the backend's JSON shape.

Record IDs are integers assigned by the server. The client never makes one up.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List


class Part(Enum):
    """Category a member belongs to. Used to filter which records are fetched."""

    WEB = "web"
    IOS = "ios"
    SERVER = "server"

    @property
    def label(self) -> str:
        return self.value.upper()


DEFAULT_PART = Part.WEB

RECORD_FIELDS = ("id", "name", "age", "part")


@dataclass(frozen=True)
class Record:
    """A member as stored on the backend.

    Attributes:
        id: Server-assigned identifier (never changes)
        name: Display name
        age: Age in years
        part: Part the member belongs to
    """

    id: int
    name: str
    age: int
    part: Part

    def to_payload(self) -> Dict[str, Any]:
        """Body sent on update. The id travels in the URL, not the body."""
        return {"name": self.name, "age": self.age, "part": self.part.value}

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **self.to_payload()}


def _as_int(value: Any) -> int:
    # bool is an int subclass but never a valid id or age
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise TypeError(f"expected integer, got {type(value).__name__}")


def record_from_dict(data: Any) -> Record:
    """Build a Record from one decoded JSON object.

    Raises:
        TypeError: If data is not an object or a field has the wrong type
        KeyError: If a field is missing
        ValueError: If part is not a known Part
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected object, got {type(data).__name__}")
    missing = [key for key in RECORD_FIELDS if key not in data]
    if missing:
        raise KeyError(", ".join(missing))
    name = data["name"]
    if not isinstance(name, str):
        raise TypeError(f"name must be a string, got {type(name).__name__}")
    part = data["part"]
    if not isinstance(part, str):
        raise TypeError(f"part must be a string, got {type(part).__name__}")
    return Record(
        id=_as_int(data["id"]),
        name=name,
        age=_as_int(data["age"]),
        part=Part(part),
    )


def records_from_list(data: Any) -> List[Record]:
    """Build Records from a decoded JSON array, keeping server order."""
    if not isinstance(data, list):
        raise TypeError(f"expected array, got {type(data).__name__}")
    return [record_from_dict(item) for item in data]
