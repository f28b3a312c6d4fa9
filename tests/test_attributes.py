from __future__ import annotations

import allure
import pytest

from task_hooks.attributes import WELL_KNOWN_FIELDS, AttributeBag
from task_hooks.errors import CollisionError

pytestmark = [
    allure.epic("Taskwarrior Codec"),
    allure.feature("Attribute Bag"),
]


def test_insert_and_get_preserve_opaque_values() -> None:
    bag = AttributeBag()
    bag.insert("estimate", "PT2H")
    bag.insert("meta", {"nested": [1, 2.5, None, True]})

    assert bag.get("estimate") == "PT2H"
    assert bag.get("meta") == {"nested": [1, 2.5, None, True]}
    assert bag.get("missing") is None
    assert "estimate" in bag
    assert len(bag) == 2


def test_items_keep_insertion_order_and_restart() -> None:
    bag = AttributeBag()
    for key in ("zeta", "alpha", "mid"):
        bag.insert(key, key.upper())

    assert [key for key, _ in bag.items()] == ["zeta", "alpha", "mid"]
    assert list(bag.items()) == list(bag.items())


def test_insert_well_known_field_collides() -> None:
    bag = AttributeBag()
    with pytest.raises(CollisionError) as excinfo:
        bag.insert("project", "home")
    assert excinfo.value.key == "project"
    assert len(bag) == 0


def test_keys_are_case_sensitive() -> None:
    bag = AttributeBag()
    bag.insert("Project", "home")
    assert bag.get("Project") == "home"
    assert "project" not in bag


def test_every_well_known_field_collides() -> None:
    bag = AttributeBag()
    for key in WELL_KNOWN_FIELDS:
        with pytest.raises(CollisionError):
            bag.insert(key, 1)


def test_insert_rejects_non_json_values() -> None:
    bag = AttributeBag()
    with pytest.raises(TypeError):
        bag.insert("when", object())
    with pytest.raises(TypeError):
        bag.insert("ids", {1: "x"})


def test_stored_values_are_copies() -> None:
    source = {"items": [1]}
    bag = AttributeBag()
    bag.insert("meta", source)
    source["items"].append(2)
    assert bag.get("meta") == {"items": [1]}


def test_frozen_bag_rejects_insert() -> None:
    bag = AttributeBag({"a": 1}).freeze()
    assert bag.frozen
    with pytest.raises(TypeError):
        bag.insert("b", 2)


def test_equality_ignores_order() -> None:
    assert AttributeBag({"a": 1, "b": 2}) == AttributeBag({"b": 2, "a": 1})
    assert AttributeBag({"a": 1}) != AttributeBag({"a": 2})


def test_get_and_items_hand_out_copies() -> None:
    bag = AttributeBag({"meta": {"items": [1]}}).freeze()

    bag.get("meta")["items"].append(2)
    for _, value in bag.items():
        value["items"].append(3)

    assert bag.get("meta") == {"items": [1]}
    assert bag.get("missing", "fallback") == "fallback"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), [float("-inf")]])
def test_insert_rejects_non_finite_numbers(value: object) -> None:
    with pytest.raises(TypeError):
        AttributeBag().insert("score", value)
