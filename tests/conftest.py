"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

TASK_UUID = "3f6a1c52-8a3e-4b8f-9c1d-2e7b5a4d6f01"
OTHER_UUID = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"


@pytest.fixture()
def minimal_task_dict() -> dict[str, Any]:
    return {
        "uuid": TASK_UUID,
        "status": "pending",
        "description": "buy milk",
        "entry": "20230101T090000Z",
    }


@pytest.fixture()
def full_task_dict() -> dict[str, Any]:
    return {
        "id": 4,
        "uuid": TASK_UUID,
        "status": "completed",
        "description": "write report",
        "entry": "20230101T090000Z",
        "modified": "20230103T120000Z",
        "start": "20230102T080000Z",
        "end": "20230103T120000Z",
        "due": "20230105T000000Z",
        "project": "work.reports",
        "priority": "H",
        "tags": ["office", "quarterly"],
        "annotations": [
            {"entry": "20230102T081500Z", "description": "second draft first"},
            {"entry": "20230101T100000Z", "description": "outline"},
        ],
        "depends": [OTHER_UUID],
        "urgency": 8.5,
        "estimate": "PT2H",
        "reviewers": ["ana", "bo"],
    }
