from __future__ import annotations

from datetime import UTC, datetime

import allure
import pytest

from task_hooks.codec import decode_one, encode_one
from task_hooks.errors import ValidationError, ValidationErrorKind
from task_hooks.models import Task, present_fields
from task_hooks.status import Priority, TaskStatus

pytestmark = [
    allure.epic("Taskwarrior Codec"),
    allure.feature("Task Record"),
]

ENTRY = datetime(2023, 1, 1, tzinfo=UTC)
END = datetime(2023, 1, 2, tzinfo=UTC)


def test_direct_construction_checks_status_rules() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Task(status=TaskStatus.COMPLETED, description="x", entry=ENTRY)
    assert excinfo.value.kind == ValidationErrorKind.STATUS_FIELD_MISMATCH
    assert excinfo.value.field == "end"

    with pytest.raises(ValidationError) as excinfo:
        Task(status=TaskStatus.PENDING, description="x", entry=ENTRY, end=END)
    assert excinfo.value.field == "end"


def test_direct_construction_checks_required_fields() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Task(status=TaskStatus.PENDING, description="", entry=ENTRY)
    assert excinfo.value.kind == ValidationErrorKind.MISSING_REQUIRED_FIELD
    assert excinfo.value.field == "description"


def test_directly_built_task_encodes_and_decodes() -> None:
    task = Task(status=TaskStatus.COMPLETED, description="x", entry=ENTRY, end=END)

    assert decode_one(encode_one(task)) == task


def test_present_fields_lists_only_set_values() -> None:
    task = Task(
        status=TaskStatus.PENDING,
        description="x",
        entry=ENTRY,
        due=END,
        priority=Priority.HIGH,
        tags=frozenset({"home"}),
    )

    assert present_fields(task) == {"status", "description", "entry", "due", "priority", "tags"}
