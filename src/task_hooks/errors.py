"""Typed failures raised by the codec, the builder, and the attribute bag."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DecodeErrorKind(str, Enum):
    """What went wrong while reading Taskwarrior JSON."""

    MALFORMED_JSON = "malformed_json"
    MALFORMED_TIMESTAMP = "malformed_timestamp"
    INVALID_CALENDAR_VALUE = "invalid_calendar_value"
    UNKNOWN_STATUS = "unknown_status"
    UNKNOWN_PRIORITY = "unknown_priority"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_UUID = "invalid_uuid"
    INVALID_RECORD = "invalid_record"
    HOOK_PROTOCOL = "hook_protocol"


class ValidationErrorKind(str, Enum):
    """Builder rule that rejected a record, in reporting priority order."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    STATUS_FIELD_MISMATCH = "status_field_mismatch"
    ATTRIBUTE_COLLISION = "attribute_collision"
    INVALID_ATTRIBUTE_VALUE = "invalid_attribute_value"
    UUID_REASSIGNED = "uuid_reassigned"


@dataclass(slots=True)
class TaskHookError(Exception):
    """Base error for every recoverable task-hooks failure."""

    message: str
    code: str = "task_hook_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class DecodeError(TaskHookError):
    """Input could not be turned into task records.

    ``field`` names the offending JSON key and ``index`` the zero-based array
    element (or line) when the failure happened inside a collection.
    """

    kind: DecodeErrorKind = DecodeErrorKind.MALFORMED_JSON
    field: str | None = None
    index: int | None = None

    def __str__(self) -> str:
        location: list[str] = []
        if self.index is not None:
            location.append(f"[{self.index}]")
        if self.field is not None:
            location.append(self.field)
        if not location:
            return self.message
        return f"{''.join(location)}: {self.message}"


@dataclass(slots=True)
class ValidationError(TaskHookError):
    """A record assembled by the builder violates a record invariant."""

    kind: ValidationErrorKind = ValidationErrorKind.MISSING_REQUIRED_FIELD
    field: str | None = None

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.field}: {self.message}"


@dataclass(slots=True)
class CollisionError(TaskHookError):
    """A user-defined attribute tried to shadow a well-known field."""

    key: str = ""
