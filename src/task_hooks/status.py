"""Task lifecycle states, their field-legality rules, and priority levels."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from typing import Any

from task_hooks.attributes import WELL_KNOWN_FIELDS
from task_hooks.errors import DecodeError, DecodeErrorKind


@dataclass(frozen=True, slots=True)
class StatusRule:
    """Fields a status demands and fields it rules out."""

    requires: frozenset[str] = frozenset()
    forbids: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class StatusViolation:
    """First rule a record breaks for its status."""

    field: str
    required: bool
    message: str


class TaskStatus(str, Enum):
    """Taskwarrior lifecycle states.

    Transitions belong to Taskwarrior; this type only knows which optional
    fields each state allows.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"
    WAITING = "waiting"
    RECURRING = "recurring"

    @classmethod
    def parse(cls, raw: Any, *, field: str = "status") -> TaskStatus:
        if not isinstance(raw, str):
            raise DecodeError(
                message=f"Expected status string, got {type(raw).__name__}",
                code="type_mismatch",
                kind=DecodeErrorKind.TYPE_MISMATCH,
                field=field,
            )
        try:
            return cls(raw)
        except ValueError as error:
            raise DecodeError(
                message=f"Unknown status {raw!r}",
                code="unknown_status",
                kind=DecodeErrorKind.UNKNOWN_STATUS,
                field=field,
            ) from error

    @property
    def rule(self) -> StatusRule:
        return _STATUS_RULES[self]

    def violation(self, present_fields: Collection[str]) -> StatusViolation | None:
        """Return the first broken rule, required fields before forbidden ones."""

        rule = self.rule
        for name in WELL_KNOWN_FIELDS:
            if name in rule.requires and name not in present_fields:
                return StatusViolation(
                    field=name,
                    required=True,
                    message=f"status {self.value!r} requires {name!r}",
                )
        for name in WELL_KNOWN_FIELDS:
            if name in rule.forbids and name in present_fields:
                return StatusViolation(
                    field=name,
                    required=False,
                    message=f"status {self.value!r} must not carry {name!r}",
                )
        return None


_STATUS_RULES: dict[TaskStatus, StatusRule] = {
    TaskStatus.PENDING: StatusRule(forbids=frozenset({"end"})),
    TaskStatus.COMPLETED: StatusRule(requires=frozenset({"end"})),
    TaskStatus.DELETED: StatusRule(requires=frozenset({"end"})),
    TaskStatus.WAITING: StatusRule(requires=frozenset({"wait"}), forbids=frozenset({"end"})),
    TaskStatus.RECURRING: StatusRule(
        requires=frozenset({"recur"}),
        forbids=frozenset({"parent"}),
    ),
}

_missing_rules = set(TaskStatus) - set(_STATUS_RULES)
if _missing_rules:  # pragma: no cover
    raise RuntimeError(f"No field rule for statuses: {sorted(s.value for s in _missing_rules)}")


class Priority(str, Enum):
    """Task priority, ordered NONE < LOW < MEDIUM < HIGH."""

    NONE = ""
    LOW = "L"
    MEDIUM = "M"
    HIGH = "H"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANKS[self]

    @classmethod
    def parse(cls, raw: Any, *, field: str = "priority") -> Priority:
        if not isinstance(raw, str):
            raise DecodeError(
                message=f"Expected priority string, got {type(raw).__name__}",
                code="type_mismatch",
                kind=DecodeErrorKind.TYPE_MISMATCH,
                field=field,
            )
        try:
            return cls(raw)
        except ValueError as error:
            raise DecodeError(
                message=f"Unknown priority {raw!r}, expected one of H, M, L",
                code="unknown_priority",
                kind=DecodeErrorKind.UNKNOWN_PRIORITY,
                field=field,
            ) from error

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANKS: dict[Priority, int] = {
    Priority.NONE: 0,
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
}
