"""JSON formatter registered as ``json``.

Purpose
-------
Emit one JSON document per event built from a list of dot-path fields, with
size limits so large payloads cannot flood a sink.

Contents
--------
* :func:`limit_payload` - depth/string/array truncation applied before dumping.
* :class:`JsonFormatter` - the ``json`` formatter plugin.

System Role
-----------
Structured counterpart of the ``default`` formatter; field values come from
:func:`lib_log_pipeline.domain.paths.resolve_path`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from typing import Any

from lib_log_pipeline.domain.config import FormatterConfig, PluginKind
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.paths import UNDEFINED, resolve_path
from lib_log_pipeline.domain.template import DEFAULT_TIMESTAMP_FORMAT, LEVEL_TOKEN, TIMESTAMP_TOKEN, format_timestamp

DEFAULT_FIELDS = ("timestamp", "level", "logger", "message", "data")
DEFAULT_MAX_DEPTH = 3
DEFAULT_MAX_STRING_LEN = 1000
DEFAULT_MAX_ARRAY_LEN = 100
DEFAULT_INDENT = 2

_TRUNCATED = "..."


def limit_payload(value: Any, *, max_depth: int, max_string_len: int, max_array_len: int, _depth: int = 0) -> Any:
    """Return a JSON-friendly copy of ``value`` honouring the size limits.

    Strings are cut to ``max_string_len`` characters plus ``...``; sequences
    keep ``max_array_len`` items plus a ``"... N more"`` marker; containers
    nested deeper than ``max_depth`` collapse to ``"[Object]"``/``"[Array]"``.

    Examples
    --------
    >>> limit_payload({"a": {"b": {"c": 1}}}, max_depth=2, max_string_len=5, max_array_len=2)
    {'a': {'b': '[Object]'}}
    >>> limit_payload(["abcdefgh", 2, 3], max_depth=3, max_string_len=3, max_array_len=2)
    ['abc...', 2, '... 1 more']
    """

    limits = {"max_depth": max_depth, "max_string_len": max_string_len, "max_array_len": max_array_len}
    if isinstance(value, str):
        text = str(value)
        return text if len(text) <= max_string_len else text[:max_string_len] + _TRUNCATED
    if isinstance(value, (bool, int, float)) or value is None:
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        if _depth >= max_depth:
            return "[Object]"
        return {str(key): limit_payload(item, _depth=_depth + 1, **limits) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        if _depth >= max_depth:
            return "[Array]"
        items = list(value)
        limited = [limit_payload(item, _depth=_depth + 1, **limits) for item in items[:max_array_len]]
        if len(items) > max_array_len:
            limited.append(f"... {len(items) - max_array_len} more")
        return limited
    if hasattr(value, "to_dict"):
        return limit_payload(value.to_dict(), _depth=_depth, **limits)
    return limit_payload(str(value), _depth=_depth, **limits)


def _indent(pretty: Any) -> int | None:
    if pretty is True:
        return DEFAULT_INDENT
    if isinstance(pretty, int) and not isinstance(pretty, bool) and pretty > 0:
        return pretty
    return None


class JsonFormatter:
    """Serialise selected event fields into a single JSON string.

    Examples
    --------
    >>> from lib_log_pipeline.domain.levels import LogLevel
    >>> formatter = JsonFormatter()
    >>> formatter.init(FormatterConfig(name="json", options={"format": ["LEVEL", "message", "context.user"]}))
    >>> formatter.format(LogEvent("app", LogLevel.WARN, "disk", context={"user": "u1"}))
    ['{"LEVEL": "warn", "message": "disk", "context.user": "u1"}']
    """

    name = "json"
    version = "1.0.0"
    kind = PluginKind.FORMATTER

    def __init__(self) -> None:
        self._fields: tuple[str, ...] = DEFAULT_FIELDS
        self._indent: int | None = None
        self._timestamp_format = DEFAULT_TIMESTAMP_FORMAT
        self._limits = {
            "max_depth": DEFAULT_MAX_DEPTH,
            "max_string_len": DEFAULT_MAX_STRING_LEN,
            "max_array_len": DEFAULT_MAX_ARRAY_LEN,
        }

    def init(self, config: FormatterConfig) -> None:
        fields = config.option("format", DEFAULT_FIELDS)
        self._fields = (fields,) if isinstance(fields, str) else tuple(fields)
        self._indent = _indent(config.option("pretty"))
        self._timestamp_format = config.option("timestamp_format") or DEFAULT_TIMESTAMP_FORMAT
        self._limits = {
            "max_depth": int(config.option("max_depth", DEFAULT_MAX_DEPTH)),
            "max_string_len": int(config.option("max_string_len", DEFAULT_MAX_STRING_LEN)),
            "max_array_len": int(config.option("max_array_len", DEFAULT_MAX_ARRAY_LEN)),
        }

    def format(self, event: LogEvent) -> list[Any]:
        if self._fields:
            payload = {}
            for field_name in self._fields:
                value = self._resolve(field_name, event)
                if value is not UNDEFINED:
                    payload[field_name] = value
        else:
            payload = event.to_dict()
        limited = limit_payload(payload, **self._limits)
        return [json.dumps(limited, indent=self._indent, ensure_ascii=False, default=str)]

    def _resolve(self, field_name: str, event: LogEvent) -> Any:
        if field_name == LEVEL_TOKEN:
            return event.level.value
        if field_name == TIMESTAMP_TOKEN:
            return format_timestamp(event.timestamp, self._timestamp_format)
        return resolve_path(event, field_name)

    def dispose(self) -> None:
        """Nothing to release."""


__all__ = ["DEFAULT_FIELDS", "JsonFormatter", "limit_payload"]
