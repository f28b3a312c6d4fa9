"""Codec and data model for Taskwarrior's JSON import/export and hook payloads."""

from task_hooks.attributes import WELL_KNOWN_FIELDS, AttributeBag
from task_hooks.builder import TaskBuilder
from task_hooks.codec import (
    EncodeOptions,
    decode_lines,
    decode_many,
    decode_one,
    encode_lines,
    encode_many,
    encode_one,
)
from task_hooks.dates import decode_date, encode_date
from task_hooks.errors import (
    CollisionError,
    DecodeError,
    DecodeErrorKind,
    TaskHookError,
    ValidationError,
    ValidationErrorKind,
)
from task_hooks.models import Annotation, Task
from task_hooks.status import Priority, TaskStatus

__version__ = "0.1.0"

__all__ = [
    "WELL_KNOWN_FIELDS",
    "Annotation",
    "AttributeBag",
    "CollisionError",
    "DecodeError",
    "DecodeErrorKind",
    "EncodeOptions",
    "Priority",
    "Task",
    "TaskBuilder",
    "TaskHookError",
    "TaskStatus",
    "ValidationError",
    "ValidationErrorKind",
    "__version__",
    "decode_date",
    "decode_lines",
    "decode_many",
    "decode_one",
    "encode_date",
    "encode_lines",
    "encode_many",
    "encode_one",
]
