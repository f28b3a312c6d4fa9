"""User-defined attributes (UDAs) carried next to the well-known task fields."""

from __future__ import annotations

import copy
import math
from collections.abc import Iterator
from typing import Any

from task_hooks.errors import CollisionError

# Taskwarrior's own keys, in the order the encoder emits them.
WELL_KNOWN_FIELDS: tuple[str, ...] = (
    "id",
    "uuid",
    "status",
    "description",
    "entry",
    "modified",
    "start",
    "end",
    "due",
    "scheduled",
    "wait",
    "until",
    "project",
    "priority",
    "tags",
    "annotations",
    "depends",
    "recur",
    "parent",
    "mask",
    "imask",
    "urgency",
)
WELL_KNOWN_FIELD_SET = frozenset(WELL_KNOWN_FIELDS)


def is_json_value(value: Any) -> bool:
    """Return True when ``value`` is made only of JSON-representable parts."""

    if value is None or isinstance(value, str | bool | int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, list):
        return all(is_json_value(item) for item in value)
    if isinstance(value, dict):
        return all(isinstance(key, str) and is_json_value(item) for key, item in value.items())
    return False


class AttributeBag:
    """Insertion-ordered map of UDA name to opaque JSON value.

    Values are stored as deep copies and never interpreted. Keys are
    case-sensitive and may not shadow a well-known Taskwarrior field.
    """

    __slots__ = ("_values", "_frozen")

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        self._frozen = False
        for key, value in (values or {}).items():
            self.insert(key, value)

    def insert(self, key: str, value: Any) -> None:
        if self._frozen:
            raise TypeError("AttributeBag is frozen")
        if not isinstance(key, str):
            raise TypeError(f"Attribute key must be a string, got {type(key).__name__}")
        if key in WELL_KNOWN_FIELD_SET:
            raise CollisionError(
                message=f"Attribute {key!r} collides with a well-known task field",
                code="attribute_collision",
                key=key,
            )
        if not is_json_value(value):
            raise TypeError(f"Attribute {key!r} value is not JSON-representable: {value!r}")
        self._values[key] = copy.deepcopy(value)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a deep copy of the value stored under ``key``."""

        if key not in self._values:
            return default
        return copy.deepcopy(self._values[key])

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter([(key, copy.deepcopy(value)) for key, value in self._values.items()])

    def keys(self) -> Iterator[str]:
        return iter(list(self._values))

    def copy(self) -> AttributeBag:
        clone = AttributeBag()
        clone._values = copy.deepcopy(self._values)
        return clone

    def freeze(self) -> AttributeBag:
        """Return a read-only copy of this bag."""

        clone = self.copy()
        clone._frozen = True
        return clone

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeBag):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AttributeBag({self._values!r})"
