"""Controllers for task-hooks CLI commands."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from task_hooks.codec import (
    decode_lines,
    decode_many,
    decode_one,
    encode_lines,
    encode_many,
    encode_one,
)
from task_hooks.config import Settings
from task_hooks.hooks import HookResponse, read_on_add, read_on_modify
from task_hooks.models import Task
from task_hooks.status import TaskStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DecodeCommand:
    """CLI input shared by commands that read task JSON."""

    payload: bytes
    lines: bool = False


@dataclass(slots=True)
class NormalizeCommand:
    """CLI input for decode-then-encode."""

    payload: bytes
    lines: bool = False
    one: bool = False


@dataclass(slots=True)
class HookCommand:
    """CLI input for hook passthrough."""

    payload: bytes


class TaskHooksCliController:
    """Coordinates decoding, re-encoding, and hook passthrough for the CLI."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> Settings:
        if self._settings is not None:
            return self._settings
        settings = Settings.from_env()
        settings.validate()
        return settings

    def check(self, command: DecodeCommand) -> list[str]:
        tasks = _decode(command.payload, lines=command.lines)
        return [f"OK: {len(tasks)} task(s)"]

    def summary(self, command: DecodeCommand) -> list[str]:
        tasks = _decode(command.payload, lines=command.lines)
        counts = Counter(task.status for task in tasks)
        lines = [f"Tasks: {len(tasks)}"]
        lines.extend(
            f"{status.value}: {counts[status]}" for status in TaskStatus if counts[status]
        )
        attribute_names = sorted({key for task in tasks for key in task.attributes})
        if attribute_names:
            lines.append(f"UDAs: {', '.join(attribute_names)}")
        return lines

    def normalize(self, command: NormalizeCommand) -> bytes:
        options = self.settings.codec.encode_options()
        if command.one:
            return encode_one(decode_one(command.payload), options)
        if command.lines:
            return encode_lines(decode_lines(command.payload), options)
        return encode_many(decode_many(command.payload), options)

    def on_add(self, command: HookCommand) -> bytes:
        task = read_on_add(command.payload)
        logger.info("on-add accepted task: %s", task.description)
        return HookResponse(task=task).render(self.settings.codec.encode_options())

    def on_modify(self, command: HookCommand) -> bytes:
        event = read_on_modify(command.payload)
        feedback: list[str] = []
        if event.original.status != event.modified.status:
            feedback.append(
                f"Status {event.original.status.value} -> {event.modified.status.value}",
            )
        logger.info("on-modify accepted task %s", event.modified.uuid)
        return HookResponse(task=event.modified, feedback=feedback).render(
            self.settings.codec.encode_options(),
        )


def _decode(payload: bytes, *, lines: bool) -> list[Task]:
    if lines:
        return decode_lines(payload)
    stripped = payload.lstrip()
    if stripped.startswith(b"{"):
        return [decode_one(payload)]
    return decode_many(payload)
