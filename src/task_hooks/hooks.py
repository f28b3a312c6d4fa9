"""Framing for Taskwarrior hook payloads.

Taskwarrior hands hooks newline-delimited task objects on stdin and reads
the (possibly changed) task back, followed by free-text feedback lines:

- ``on-add``: one task in, one task out.
- ``on-modify``: original and modified task in, one task out.
- ``on-exit``: every added or modified task in, feedback only out.

Only bytes are handled here; reading stdin and exiting belong to the hook.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from task_hooks.codec import DEFAULT_ENCODE_OPTIONS, EncodeOptions, decode_lines, encode_one
from task_hooks.errors import DecodeError, DecodeErrorKind
from task_hooks.models import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ModifyEvent:
    """Pair of task states handed to an on-modify hook."""

    original: Task
    modified: Task


@dataclass(slots=True)
class HookResponse:
    """What a hook writes back to Taskwarrior."""

    task: Task | None = None
    feedback: Sequence[str] = ()

    def render(self, options: EncodeOptions = DEFAULT_ENCODE_OPTIONS) -> bytes:
        lines: list[bytes] = []
        if self.task is not None:
            lines.append(encode_one(self.task, options))
        lines.extend(line.encode("utf-8") for line in self.feedback)
        if not lines:
            return b""
        return b"\n".join(lines) + b"\n"


def _expect_count(tasks: list[Task], expected: int, event: str) -> None:
    if len(tasks) != expected:
        raise DecodeError(
            message=f"{event} expects {expected} task line(s), got {len(tasks)}",
            code="hook_protocol",
            kind=DecodeErrorKind.HOOK_PROTOCOL,
        )


def read_on_add(data: bytes | str) -> Task:
    """Decode the single task an on-add hook receives."""

    tasks = decode_lines(data)
    _expect_count(tasks, 1, "on-add")
    return tasks[0]


def read_on_modify(data: bytes | str) -> ModifyEvent:
    """Decode the original/modified pair an on-modify hook receives."""

    tasks = decode_lines(data)
    _expect_count(tasks, 2, "on-modify")
    original, modified = tasks
    if original.uuid is not None and modified.uuid != original.uuid:
        raise DecodeError(
            message=f"on-modify changed uuid {original.uuid} to {modified.uuid}",
            code="hook_protocol",
            kind=DecodeErrorKind.HOOK_PROTOCOL,
            field="uuid",
            index=1,
        )
    logger.debug("on-modify received task %s", modified.uuid)
    return ModifyEvent(original=original, modified=modified)


def read_on_exit(data: bytes | str) -> list[Task]:
    """Decode the tasks touched during the command, possibly none."""

    return decode_lines(data)
