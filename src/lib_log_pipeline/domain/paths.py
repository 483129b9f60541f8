"""Dot/bracket path resolution and deep equality for structured data.

Purpose
-------
Address nested values inside log events (``data[0].items[2].id``,
``context.userId``) and compare them structurally. Filters use both helpers
to evaluate rule maps; the template engine uses :func:`resolve_path` to
expand ``{token}`` references.

Contents
--------
* :data:`UNDEFINED` - sentinel returned for missing paths.
* :func:`split_path` - cached path tokenizer.
* :func:`resolve_path` - total (never raising) path walker.
* :func:`deep_equal` - iterative structural comparison with cycle detection.

System Role
-----------
Pure domain helpers with no knowledge of plugins or the pipeline.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import date
from functools import lru_cache
from numbers import Number
from typing import Any


class _Undefined:
    """Marker for a path that does not resolve to a value."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()
"""Sentinel distinguishing "missing" from a stored ``None``."""

_BRACKET_RE = re.compile(r"\[\s*['\"]?([^\]'\"]*)['\"]?\s*\]")
_SCALARS = (str, bytes, bytearray, Number, bool, date)


@lru_cache(maxsize=512)
def split_path(path: str) -> tuple[str, ...]:
    """Split ``path`` into segments, turning ``[n]`` into a plain ``n`` segment.

    Examples
    --------
    >>> split_path("data[0].items[2].id")
    ('data', '0', 'items', '2', 'id')
    >>> split_path("context['user'].name")
    ('context', 'user', 'name')
    """

    dotted = _BRACKET_RE.sub(r".\1", path)
    return tuple(segment for segment in dotted.split(".") if segment)


def _is_index(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()


def _step(value: Any, segment: str) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return UNDEFINED
    if isinstance(value, Mapping):
        if segment in value:
            return value[segment]
        if _is_index(segment) and int(segment) in value:
            return value[int(segment)]
        return UNDEFINED
    if isinstance(value, Sequence):
        if not _is_index(segment):
            return UNDEFINED
        index = int(segment)
        return value[index] if index < len(value) else UNDEFINED
    if not segment.isidentifier() or segment.startswith("_"):
        return UNDEFINED
    return getattr(value, segment, UNDEFINED)


def resolve_path(root: Any, path: str) -> Any:
    """Return the value addressed by ``path`` inside ``root`` or :data:`UNDEFINED`.

    Numeric segments index sequences, other segments look up mapping keys or
    public attributes. Any failure while walking yields :data:`UNDEFINED`.

    Examples
    --------
    >>> resolve_path({"data": [{"items": [{}, {}, {"id": 4}]}]}, "data[0].items[2].id")
    4
    >>> resolve_path({"data": []}, "data[3].id")
    UNDEFINED
    """

    try:
        segments = split_path(path)
    except TypeError:
        return UNDEFINED
    if not segments:
        return UNDEFINED
    value = root
    for segment in segments:
        try:
            value = _step(value, segment)
        except Exception:
            return UNDEFINED
        if value is UNDEFINED:
            return UNDEFINED
    return value


_DESCEND = object()
_LEAVE = object()
_VISIT = object()


def _compare_leaf(left: Any, right: Any) -> Any:
    """Return ``True``/``False`` for leaves or :data:`_DESCEND` for containers."""

    if left is right:
        return True
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, Number) and isinstance(right, Number):
        if left != left and right != right:
            return True
        return left == right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    if isinstance(left, bytes) or isinstance(right, bytes):
        return isinstance(left, bytes) and isinstance(right, bytes) and left == right
    if isinstance(left, date) and isinstance(right, date):
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return _DESCEND
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return _DESCEND
    return False


def deep_equal(left: Any, right: Any) -> bool:
    """Compare two values structurally.

    Primitives compare by value (``NaN`` equals ``NaN``, booleans never equal
    numbers), dates by instant, lists/tuples element-wise, mappings by key set
    and values; anything else by identity. Cyclic structures compare unequal.

    Examples
    --------
    >>> deep_equal({"a": [1, {"b": float("nan")}]}, {"a": (1, {"b": float("nan")})})
    True
    >>> deep_equal(True, 1)
    False
    >>> loop = []
    >>> loop.append(loop)
    >>> other = []
    >>> other.append(other)
    >>> deep_equal(loop, other)
    False
    """

    stack: list[tuple[object, Any, Any]] = [(_VISIT, left, right)]
    on_path: set[tuple[int, int]] = set()
    while stack:
        action, a, b = stack.pop()
        if action is _LEAVE:
            on_path.discard((id(a), id(b)))
            continue
        verdict = _compare_leaf(a, b)
        if verdict is False:
            return False
        if verdict is True:
            continue
        key = (id(a), id(b))
        if key in on_path:
            return False
        on_path.add(key)
        stack.append((_LEAVE, a, b))
        if isinstance(a, Mapping):
            if set(a.keys()) != set(b.keys()):
                return False
            stack.extend((_VISIT, a[name], b[name]) for name in a)
        else:
            if len(a) != len(b):
                return False
            stack.extend((_VISIT, x, y) for x, y in zip(a, b))
    return True


__all__ = ["UNDEFINED", "deep_equal", "resolve_path", "split_path"]
