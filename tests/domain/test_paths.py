from __future__ import annotations

import math
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from lib_log_pipeline.domain.paths import UNDEFINED, deep_equal, resolve_path, split_path


def test_resolve_bracket_and_dot_path() -> None:
    root = {"data": [{"items": [{}, {}, {"id": 4}]}]}
    assert resolve_path(root, "data[0].items[2].id") == 4


@pytest.mark.parametrize(
    "path",
    ["missing", "data[5]", "data[0].items[9].id", "data.first", "data[-1]", "", "data[0].items[2].id.deeper"],
)
def test_missing_paths_yield_undefined(path: str) -> None:
    root = {"data": [{"items": [{}, {}, {"id": 4}]}]}
    assert resolve_path(root, path) is UNDEFINED


def test_resolve_distinguishes_none_from_missing() -> None:
    assert resolve_path({"value": None}, "value") is None
    assert resolve_path({"value": None}, "value.inner") is UNDEFINED


def test_resolve_reads_public_attributes_only(make_event) -> None:
    event = make_event(context={"userId": "u1"})
    assert resolve_path(event, "logger") == "tests"
    assert resolve_path(event, "context.userId") == "u1"
    assert resolve_path(SimpleNamespace(_secret=1), "_secret") is UNDEFINED


def test_resolve_never_raises_on_hostile_objects() -> None:
    class Exploding:
        @property
        def value(self) -> int:
            raise RuntimeError("boom")

    assert resolve_path(Exploding(), "value") is UNDEFINED
    assert resolve_path(None, "anything") is UNDEFINED


def test_split_path_handles_quoted_keys() -> None:
    assert split_path("context['user'].name") == ("context", "user", "name")
    assert split_path('a["b"][0]') == ("a", "b", "0")


def test_undefined_is_falsy_singleton() -> None:
    assert not UNDEFINED
    assert repr(UNDEFINED) == "UNDEFINED"
    assert type(UNDEFINED)() is UNDEFINED


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (1, 1, True),
        (1, 1.0, True),
        (True, 1, False),
        (0, False, False),
        (math.nan, math.nan, True),
        ("a", "a", True),
        ("1", 1, False),
        (b"a", "a", False),
        (None, None, True),
        ([1, [2, 3]], (1, [2, 3]), True),
        ([1, 2], [1, 2, 3], False),
        ({"a": 1, "b": [1]}, {"b": [1], "a": 1}, True),
        ({"a": 1}, {"a": 1, "b": 2}, False),
        ({"a": 1}, [("a", 1)], False),
    ],
)
def test_deep_equal_primitives_and_containers(left, right, expected: bool) -> None:
    assert deep_equal(left, right) is expected


def test_deep_equal_compares_datetimes_by_instant() -> None:
    first = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    second = first.astimezone()
    assert deep_equal(first, second)


def test_deep_equal_uses_identity_for_other_objects() -> None:
    marker = object()
    assert deep_equal(marker, marker)
    assert not deep_equal(object(), object())


def test_deep_equal_rejects_cycles() -> None:
    left: dict = {"name": "x"}
    left["self"] = left
    right: dict = {"name": "x"}
    right["self"] = right
    assert deep_equal(left, right) is False


def test_deep_equal_handles_deep_nesting_without_recursion() -> None:
    left: list = []
    right: list = []
    cursor_left, cursor_right = left, right
    for _ in range(5000):
        cursor_left.append([])
        cursor_right.append([])
        cursor_left, cursor_right = cursor_left[0], cursor_right[0]
    assert deep_equal(left, right)
