"""Task records as Taskwarrior exports and imports them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from task_hooks.attributes import AttributeBag
from task_hooks.errors import ValidationError, ValidationErrorKind
from task_hooks.status import Priority, TaskStatus

OPTIONAL_SCALARS: tuple[str, ...] = (
    "uuid",
    "id",
    "modified",
    "start",
    "end",
    "due",
    "scheduled",
    "wait",
    "until",
    "project",
    "recur",
    "parent",
    "mask",
    "imask",
    "urgency",
)


@dataclass(frozen=True, slots=True)
class Annotation:
    """Timestamped note attached to a task."""

    entry: datetime
    description: str


@dataclass(frozen=True, slots=True)
class Task:
    """One immutable Taskwarrior task.

    Build instances with ``TaskBuilder`` or the codec. Direct construction
    still checks the required fields and the status field rules, raising
    ``ValidationError``. ``attributes`` holds every key Taskwarrior knows and
    this library does not.
    """

    status: TaskStatus
    description: str
    entry: datetime
    uuid: UUID | None = None
    id: int | None = None
    modified: datetime | None = None
    start: datetime | None = None
    end: datetime | None = None
    due: datetime | None = None
    scheduled: datetime | None = None
    wait: datetime | None = None
    until: datetime | None = None
    project: str | None = None
    priority: Priority = Priority.NONE
    tags: frozenset[str] = frozenset()
    annotations: tuple[Annotation, ...] = ()
    depends: frozenset[UUID] = frozenset()
    recur: str | None = None
    parent: UUID | None = None
    mask: str | None = None
    imask: int | None = None
    urgency: float | None = None
    attributes: AttributeBag = field(default_factory=lambda: AttributeBag().freeze())

    def __post_init__(self) -> None:
        for name in ("status", "description", "entry"):
            if getattr(self, name) in (None, ""):
                raise ValidationError(
                    message=f"required field {name!r} is missing",
                    code="missing_required_field",
                    kind=ValidationErrorKind.MISSING_REQUIRED_FIELD,
                    field=name,
                )
        violation = self.status.violation(present_fields(self))
        if violation is not None:
            raise ValidationError(
                message=violation.message,
                code="status_field_mismatch",
                kind=ValidationErrorKind.STATUS_FIELD_MISMATCH,
                field=violation.field,
            )


def present_fields(task: Task) -> set[str]:
    """Names of the well-known fields ``task`` carries a value for."""

    present = {"status", "description", "entry"}
    present.update(name for name in OPTIONAL_SCALARS if getattr(task, name) is not None)
    if task.priority is not Priority.NONE:
        present.add("priority")
    for name in ("tags", "annotations", "depends"):
        if getattr(task, name):
            present.add(name)
    return present
