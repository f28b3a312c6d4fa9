from __future__ import annotations

import json
from typing import Any

import allure
import pytest

from task_hooks.errors import DecodeError, DecodeErrorKind
from task_hooks.hooks import HookResponse, read_on_add, read_on_exit, read_on_modify
from task_hooks.status import TaskStatus

pytestmark = [
    allure.epic("Taskwarrior Codec"),
    allure.feature("Hook Payloads"),
]


def _line(payload: dict[str, Any]) -> str:
    return json.dumps(payload)


def test_on_add_reads_single_task(minimal_task_dict: dict[str, Any]) -> None:
    task = read_on_add(_line(minimal_task_dict) + "\n")
    assert task.description == "buy milk"


def test_on_add_rejects_extra_lines(minimal_task_dict: dict[str, Any]) -> None:
    payload = "\n".join([_line(minimal_task_dict)] * 2)
    with pytest.raises(DecodeError) as excinfo:
        read_on_add(payload)
    assert excinfo.value.kind == DecodeErrorKind.HOOK_PROTOCOL


def test_on_modify_reads_original_and_modified(minimal_task_dict: dict[str, Any]) -> None:
    modified = dict(minimal_task_dict, status="completed", end="20230102T090000Z")
    payload = f"{_line(minimal_task_dict)}\n{_line(modified)}\n".encode("utf-8")

    event = read_on_modify(payload)

    assert event.original.status is TaskStatus.PENDING
    assert event.modified.status is TaskStatus.COMPLETED


def test_on_modify_requires_two_lines(minimal_task_dict: dict[str, Any]) -> None:
    with pytest.raises(DecodeError) as excinfo:
        read_on_modify(_line(minimal_task_dict))
    assert excinfo.value.kind == DecodeErrorKind.HOOK_PROTOCOL


def test_on_modify_rejects_uuid_change(minimal_task_dict: dict[str, Any]) -> None:
    modified = dict(minimal_task_dict, uuid="a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d")
    payload = f"{_line(minimal_task_dict)}\n{_line(modified)}"

    with pytest.raises(DecodeError) as excinfo:
        read_on_modify(payload)

    assert excinfo.value.kind == DecodeErrorKind.HOOK_PROTOCOL
    assert excinfo.value.field == "uuid"


def test_on_modify_bad_line_carries_line_index(minimal_task_dict: dict[str, Any]) -> None:
    modified = dict(minimal_task_dict, status="done")
    payload = f"{_line(minimal_task_dict)}\n{_line(modified)}"

    with pytest.raises(DecodeError) as excinfo:
        read_on_modify(payload)

    assert excinfo.value.kind == DecodeErrorKind.UNKNOWN_STATUS
    assert excinfo.value.index == 1


def test_on_exit_accepts_no_tasks() -> None:
    assert read_on_exit(b"") == []


def test_response_renders_task_then_feedback(minimal_task_dict: dict[str, Any]) -> None:
    task = read_on_add(_line(minimal_task_dict))

    rendered = HookResponse(task=task, feedback=["Looks good."]).render()

    first, second = rendered.decode("utf-8").splitlines()
    assert json.loads(first) == minimal_task_dict
    assert second == "Looks good."
    assert rendered.endswith(b"\n")


def test_empty_response_renders_nothing() -> None:
    assert HookResponse().render() == b""
