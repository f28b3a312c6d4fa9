"""Read and write Taskwarrior JSON: single objects, arrays, and JSON lines."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from task_hooks.attributes import WELL_KNOWN_FIELD_SET
from task_hooks.builder import DATE_FIELDS, TaskBuilder
from task_hooks.dates import decode_date, encode_date
from task_hooks.errors import DecodeError, DecodeErrorKind, ValidationError
from task_hooks.models import Annotation, Task
from task_hooks.status import Priority, TaskStatus

logger = logging.getLogger(__name__)

_TEXT_FIELDS: tuple[str, ...] = ("description", "project", "recur", "mask")


@dataclass(slots=True)
class EncodeOptions:
    """Output knobs for the encoder."""

    ensure_ascii: bool = False
    # Taskwarrior 2.5 reads ``depends`` as one comma-separated string.
    depends_as_string: bool = False


DEFAULT_ENCODE_OPTIONS = EncodeOptions()


def _type_mismatch(field: str, expected: str, value: Any) -> DecodeError:
    return DecodeError(
        message=f"Expected {expected}, got {type(value).__name__}",
        code="type_mismatch",
        kind=DecodeErrorKind.TYPE_MISMATCH,
        field=field,
    )


def _decode_uuid(raw: Any, *, field: str) -> UUID:
    if not isinstance(raw, str):
        raise _type_mismatch(field, "UUID string", raw)
    try:
        return UUID(raw)
    except ValueError as error:
        raise DecodeError(
            message=f"Malformed UUID {raw!r}",
            code="invalid_uuid",
            kind=DecodeErrorKind.INVALID_UUID,
            field=field,
        ) from error


def _decode_timestamp(raw: Any, *, field: str) -> datetime:
    if not isinstance(raw, str):
        raise _type_mismatch(field, "timestamp string", raw)
    return decode_date(raw, field=field)


def _decode_int(raw: Any, *, field: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise _type_mismatch(field, "integer", raw)
    return raw


def _decode_number(raw: Any, *, field: str) -> int | float:
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise _type_mismatch(field, "number", raw)
    return raw


def _decode_text(raw: Any, *, field: str) -> str:
    if not isinstance(raw, str):
        raise _type_mismatch(field, "string", raw)
    return raw


def _decode_tags(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        raise _type_mismatch("tags", "array of strings", raw)
    for item in raw:
        if not isinstance(item, str):
            raise _type_mismatch("tags", "array of strings", item)
    return raw


def _decode_depends(raw: Any) -> list[UUID]:
    # Taskwarrior < 2.6 exports a comma-separated string.
    if isinstance(raw, str):
        items: list[Any] = [part.strip() for part in raw.split(",") if part.strip()]
    elif isinstance(raw, list):
        items = raw
    else:
        raise _type_mismatch("depends", "array of UUID strings", raw)
    return [_decode_uuid(item, field="depends") for item in items]


def _decode_annotations(raw: Any) -> list[Annotation]:
    if not isinstance(raw, list):
        raise _type_mismatch("annotations", "array of objects", raw)
    annotations: list[Annotation] = []
    for position, item in enumerate(raw):
        field = f"annotations[{position}]"
        if not isinstance(item, dict):
            raise _type_mismatch(field, "object", item)
        if "entry" not in item or "description" not in item:
            raise DecodeError(
                message="annotation needs 'entry' and 'description'",
                code="type_mismatch",
                kind=DecodeErrorKind.TYPE_MISMATCH,
                field=field,
            )
        annotations.append(
            Annotation(
                entry=_decode_timestamp(item["entry"], field=f"{field}.entry"),
                description=_decode_text(item["description"], field=f"{field}.description"),
            ),
        )
    return annotations


_SCALAR_DECODERS: dict[str, Callable[[Any], Any]] = {
    "uuid": lambda raw: _decode_uuid(raw, field="uuid"),
    "parent": lambda raw: _decode_uuid(raw, field="parent"),
    "id": lambda raw: _decode_int(raw, field="id"),
    "imask": lambda raw: _decode_int(raw, field="imask"),
    "urgency": lambda raw: _decode_number(raw, field="urgency"),
    "status": TaskStatus.parse,
    **{
        name: (lambda raw, name=name: _decode_timestamp(raw, field=name))
        for name in DATE_FIELDS
    },
    **{name: (lambda raw, name=name: _decode_text(raw, field=name)) for name in _TEXT_FIELDS},
}


def task_from_dict(raw: dict[str, Any]) -> Task:
    """Turn one decoded JSON object into a validated ``Task``."""

    builder = TaskBuilder()
    for key, value in raw.items():
        if key not in WELL_KNOWN_FIELD_SET:
            builder.attribute(key, value)
            continue
        if value is None:
            # Taskwarrior never writes null; refuse it instead of guessing.
            raise _type_mismatch(key, "a value", value)
        if key == "priority":
            builder.priority(Priority.parse(value))
        elif key == "tags":
            builder.tags(_decode_tags(value))
        elif key == "annotations":
            builder.annotations(_decode_annotations(value))
        elif key == "depends":
            builder.depends(_decode_depends(value))
        else:
            getattr(builder, key)(_SCALAR_DECODERS[key](value))

    try:
        return builder.build()
    except ValidationError as error:
        raise DecodeError(
            message=error.message,
            code="invalid_record",
            kind=DecodeErrorKind.INVALID_RECORD,
            field=error.field,
        ) from error


def task_to_dict(task: Task, options: EncodeOptions = DEFAULT_ENCODE_OPTIONS) -> dict[str, Any]:
    """Map a ``Task`` to the flat object Taskwarrior's exporter writes.

    Absent optional fields are omitted, never written as null.
    """

    payload: dict[str, Any] = {}
    if task.id is not None:
        payload["id"] = task.id
    if task.uuid is not None:
        payload["uuid"] = str(task.uuid)
    payload["status"] = task.status.value
    payload["description"] = task.description
    for name in DATE_FIELDS:
        value = getattr(task, name)
        if value is not None:
            payload[name] = encode_date(value)
    if task.project is not None:
        payload["project"] = task.project
    if task.priority is not Priority.NONE:
        payload["priority"] = task.priority.value
    if task.tags:
        payload["tags"] = sorted(task.tags)
    if task.annotations:
        payload["annotations"] = [
            {"entry": encode_date(item.entry), "description": item.description}
            for item in task.annotations
        ]
    if task.depends:
        depends = sorted(str(value) for value in task.depends)
        payload["depends"] = ",".join(depends) if options.depends_as_string else depends
    if task.recur is not None:
        payload["recur"] = task.recur
    if task.parent is not None:
        payload["parent"] = str(task.parent)
    if task.mask is not None:
        payload["mask"] = task.mask
    if task.imask is not None:
        payload["imask"] = task.imask
    if task.urgency is not None:
        payload["urgency"] = task.urgency
    for key, value in task.attributes.items():
        payload[key] = value
    return payload


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a JSON value")


def _load_json(data: bytes | str) -> Any:
    if isinstance(data, bytes | bytearray):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as error:
            raise DecodeError(
                message=f"Input is not valid UTF-8: {error}",
                code="malformed_json",
                kind=DecodeErrorKind.MALFORMED_JSON,
            ) from error
    try:
        return json.loads(data, parse_constant=_reject_constant)
    except ValueError as error:
        raise DecodeError(
            message=f"Input is not valid JSON: {error}",
            code="malformed_json",
            kind=DecodeErrorKind.MALFORMED_JSON,
        ) from error


def _decode_element(raw: Any, index: int | None) -> Task:
    try:
        if not isinstance(raw, dict):
            raise DecodeError(
                message=f"Expected a task object, got {type(raw).__name__}",
                code="type_mismatch",
                kind=DecodeErrorKind.TYPE_MISMATCH,
            )
        return task_from_dict(raw)
    except DecodeError as error:
        if index is None:
            raise
        raise replace(error, index=index) from error


def decode_one(data: bytes | str) -> Task:
    """Decode exactly one JSON task object."""

    return _decode_element(_load_json(data), None)


def decode_many(data: bytes | str) -> list[Task]:
    """Decode a JSON array of tasks; any bad element fails the whole call."""

    raw = _load_json(data)
    if not isinstance(raw, list):
        raise DecodeError(
            message=f"Expected a JSON array of tasks, got {type(raw).__name__}",
            code="type_mismatch",
            kind=DecodeErrorKind.TYPE_MISMATCH,
        )
    tasks = [_decode_element(item, index) for index, item in enumerate(raw)]
    logger.debug("Decoded %d task(s) from JSON array", len(tasks))
    return tasks


def decode_lines(data: bytes | str) -> list[Task]:
    """Decode one JSON object per line, skipping blank lines.

    ``DecodeError.index`` is the zero-based line number of the bad line.
    """

    text = data
    if isinstance(data, bytes | bytearray):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as error:
            raise DecodeError(
                message=f"Input is not valid UTF-8: {error}",
                code="malformed_json",
                kind=DecodeErrorKind.MALFORMED_JSON,
            ) from error

    tasks: list[Task] = []
    for line_no, line in enumerate(str(text).splitlines()):
        if not line.strip():
            continue
        try:
            raw = _load_json(line)
        except DecodeError as error:
            raise replace(error, index=line_no) from error
        tasks.append(_decode_element(raw, line_no))
    logger.debug("Decoded %d task(s) from JSON lines", len(tasks))
    return tasks


def _dumps(payload: Any, options: EncodeOptions) -> bytes:
    return json.dumps(
        payload,
        ensure_ascii=options.ensure_ascii,
        separators=(",", ":"),
    ).encode("utf-8")


def encode_one(task: Task, options: EncodeOptions = DEFAULT_ENCODE_OPTIONS) -> bytes:
    """Encode one task as a compact JSON object."""

    return _dumps(task_to_dict(task, options), options)


def encode_many(
    tasks: Iterable[Task],
    options: EncodeOptions = DEFAULT_ENCODE_OPTIONS,
) -> bytes:
    """Encode tasks as one compact JSON array, preserving order."""

    payload = [task_to_dict(task, options) for task in tasks]
    logger.debug("Encoded %d task(s) as JSON array", len(payload))
    return _dumps(payload, options)


def encode_lines(
    tasks: Iterable[Task],
    options: EncodeOptions = DEFAULT_ENCODE_OPTIONS,
) -> bytes:
    """Encode tasks one object per line, newline-separated."""

    return b"\n".join(encode_one(task, options) for task in tasks)
