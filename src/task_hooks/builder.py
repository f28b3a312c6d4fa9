"""Validated, incremental construction of ``Task`` records."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import UUID

from task_hooks.attributes import WELL_KNOWN_FIELD_SET, AttributeBag, is_json_value
from task_hooks.dates import normalize_date
from task_hooks.errors import ValidationError, ValidationErrorKind
from task_hooks.models import OPTIONAL_SCALARS, Annotation, Task
from task_hooks.status import Priority, TaskStatus

_REQUIRED_FIELDS: tuple[str, ...] = ("status", "description", "entry")

DATE_FIELDS: tuple[str, ...] = (
    "entry",
    "modified",
    "start",
    "end",
    "due",
    "scheduled",
    "wait",
    "until",
)


class TaskBuilder:
    """Accumulates task fields and freezes them into a ``Task``.

    Setters only store values; every rule is checked by ``build``. A builder
    is single-use: after ``build`` returns or raises, further calls raise
    ``RuntimeError``.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._priority = Priority.NONE
        self._tags: dict[str, None] = {}
        self._annotations: list[Annotation] = []
        self._depends: dict[UUID, None] = {}
        self._attributes: list[tuple[str, Any]] = []
        self._pinned_uuid: UUID | None = None
        self._consumed = False

    @classmethod
    def from_task(cls, task: Task) -> TaskBuilder:
        """Seed a builder with every field of ``task``; its UUID stays pinned."""

        builder = cls()
        builder._values["status"] = task.status
        builder._values["description"] = task.description
        builder._values["entry"] = task.entry
        for name in OPTIONAL_SCALARS:
            value = getattr(task, name)
            if value is not None:
                builder._values[name] = value
        builder._priority = task.priority
        builder._tags = dict.fromkeys(sorted(task.tags))
        builder._annotations = list(task.annotations)
        builder._depends = dict.fromkeys(sorted(task.depends, key=str))
        builder._attributes = list(task.attributes.items())
        builder._pinned_uuid = task.uuid
        return builder

    def _set(self, name: str, value: Any) -> TaskBuilder:
        self._check_open()
        if value is None:
            self._values.pop(name, None)
        else:
            self._values[name] = value
        return self

    def _check_open(self) -> None:
        if self._consumed:
            raise RuntimeError("TaskBuilder was already used; start a new builder")

    def uuid(self, value: UUID | None) -> TaskBuilder:
        return self._set("uuid", value)

    def id(self, value: int | None) -> TaskBuilder:
        return self._set("id", value)

    def status(self, value: TaskStatus | None) -> TaskBuilder:
        return self._set("status", value)

    def description(self, value: str | None) -> TaskBuilder:
        return self._set("description", value)

    def entry(self, value: datetime | None) -> TaskBuilder:
        return self._set("entry", value)

    def modified(self, value: datetime | None) -> TaskBuilder:
        return self._set("modified", value)

    def start(self, value: datetime | None) -> TaskBuilder:
        return self._set("start", value)

    def end(self, value: datetime | None) -> TaskBuilder:
        return self._set("end", value)

    def due(self, value: datetime | None) -> TaskBuilder:
        return self._set("due", value)

    def scheduled(self, value: datetime | None) -> TaskBuilder:
        return self._set("scheduled", value)

    def wait(self, value: datetime | None) -> TaskBuilder:
        return self._set("wait", value)

    def until(self, value: datetime | None) -> TaskBuilder:
        return self._set("until", value)

    def project(self, value: str | None) -> TaskBuilder:
        return self._set("project", value)

    def recur(self, value: str | None) -> TaskBuilder:
        return self._set("recur", value)

    def parent(self, value: UUID | None) -> TaskBuilder:
        return self._set("parent", value)

    def mask(self, value: str | None) -> TaskBuilder:
        return self._set("mask", value)

    def imask(self, value: int | None) -> TaskBuilder:
        return self._set("imask", value)

    def urgency(self, value: float | None) -> TaskBuilder:
        return self._set("urgency", value)

    def priority(self, value: Priority | None) -> TaskBuilder:
        self._check_open()
        self._priority = value or Priority.NONE
        return self

    def tag(self, name: str) -> TaskBuilder:
        self._check_open()
        self._tags[name] = None
        return self

    def tags(self, names: Iterable[str]) -> TaskBuilder:
        """Replace the tag set."""

        self._check_open()
        self._tags = dict.fromkeys(names)
        return self

    def annotate(self, entry: datetime, description: str) -> TaskBuilder:
        self._check_open()
        self._annotations.append(Annotation(entry=entry, description=description))
        return self

    def annotations(self, annotations: Iterable[Annotation]) -> TaskBuilder:
        """Replace the annotation list, keeping the given order."""

        self._check_open()
        self._annotations = list(annotations)
        return self

    def depends_on(self, *uuids: UUID) -> TaskBuilder:
        self._check_open()
        for value in uuids:
            self._depends[value] = None
        return self

    def depends(self, uuids: Iterable[UUID]) -> TaskBuilder:
        """Replace the dependency set."""

        self._check_open()
        self._depends = dict.fromkeys(uuids)
        return self

    def attribute(self, key: str, value: Any) -> TaskBuilder:
        """Stage a UDA; a later value for the same key wins."""

        self._check_open()
        self._attributes = [(name, item) for name, item in self._attributes if name != key]
        self._attributes.append((key, value))
        return self

    def present_fields(self) -> set[str]:
        present = set(self._values)
        if self._priority is not Priority.NONE:
            present.add("priority")
        if self._tags:
            present.add("tags")
        if self._annotations:
            present.add("annotations")
        if self._depends:
            present.add("depends")
        return present

    def build(self) -> Task:
        """Validate everything and return the frozen record.

        Reports the first problem in a fixed order: missing required field,
        status/field mismatch, attribute collision, invalid attribute value,
        UUID reassignment. Dates are truncated to whole UTC seconds.
        """

        self._check_open()
        self._consumed = True

        for name in _REQUIRED_FIELDS:
            if self._values.get(name) in (None, ""):
                raise ValidationError(
                    message=f"required field {name!r} is missing",
                    code="missing_required_field",
                    kind=ValidationErrorKind.MISSING_REQUIRED_FIELD,
                    field=name,
                )

        status: TaskStatus = self._values["status"]
        violation = status.violation(self.present_fields())
        if violation is not None:
            raise ValidationError(
                message=violation.message,
                code="status_field_mismatch",
                kind=ValidationErrorKind.STATUS_FIELD_MISMATCH,
                field=violation.field,
            )

        for key, _ in self._attributes:
            if isinstance(key, str) and key in WELL_KNOWN_FIELD_SET:
                raise ValidationError(
                    message=f"attribute {key!r} collides with a well-known task field",
                    code="attribute_collision",
                    kind=ValidationErrorKind.ATTRIBUTE_COLLISION,
                    field=key,
                )
        for key, value in self._attributes:
            if not isinstance(key, str) or not is_json_value(value):
                raise ValidationError(
                    message=f"attribute {key!r} is not a string key with a JSON value",
                    code="invalid_attribute_value",
                    kind=ValidationErrorKind.INVALID_ATTRIBUTE_VALUE,
                    field=str(key),
                )

        uuid = self._values.get("uuid")
        if self._pinned_uuid is not None and uuid != self._pinned_uuid:
            raise ValidationError(
                message=f"uuid {self._pinned_uuid} cannot be changed to {uuid}",
                code="uuid_reassigned",
                kind=ValidationErrorKind.UUID_REASSIGNED,
                field="uuid",
            )

        bag = AttributeBag()
        for key, value in self._attributes:
            bag.insert(key, value)

        # Whole UTC seconds, as encode_date writes them.
        values = dict(self._values)
        for name in DATE_FIELDS:
            if name in values:
                values[name] = normalize_date(values[name])
        annotations = tuple(
            Annotation(entry=normalize_date(item.entry), description=item.description)
            for item in self._annotations
        )

        return Task(
            tags=frozenset(self._tags),
            annotations=annotations,
            depends=frozenset(self._depends),
            priority=self._priority,
            attributes=bag.freeze(),
            **values,
        )
