"""Token-based template engine used by formatters.

Purpose
-------
Turn format specifications such as ``"{timestamp} [{LEVEL}] ({logger}) {message}"``
or ``["{message}", "{data}"]`` into an ordered list of output tokens for a
:class:`LogEvent`.

Contents
--------
* :class:`Literal` / :class:`Token` - parsed template segments.
* :func:`parse_template` - split one template line into segments.
* :func:`format_timestamp` - ``iso``/``locale`` presets and token patterns.
* :class:`Template` - compiled multi-line template with :meth:`Template.render`.

System Role
-----------
Used by the ``default`` formatter; the JSON formatter reuses
:func:`format_timestamp`. Token values are resolved with
:func:`lib_log_pipeline.domain.paths.resolve_path`.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

from .events import LogEvent
from .paths import UNDEFINED, resolve_path

_TOKEN_RE = re.compile(r"\{([^{}]+?)\}")
_TIMESTAMP_TOKEN_RE = re.compile(r"yyyy|SSS|yy|MM|dd|hh|mm|ss|SS|S")
# Alternation order matters: longer tokens must win over their prefixes.

LEVEL_TOKEN = "LEVEL"
TIMESTAMP_TOKEN = "timestamp"
DATA_TOKEN = "data"
DEFAULT_TIMESTAMP_FORMAT = "iso"


@dataclass(slots=True, frozen=True)
class Literal:
    text: str


@dataclass(slots=True, frozen=True)
class Token:
    name: str


Segment = Union[Literal, Token]


def parse_template(text: str) -> tuple[Segment, ...]:
    """Split ``text`` into literal runs and ``{token}`` references.

    Examples
    --------
    >>> parse_template("[{LEVEL}] {message}")
    (Literal(text='['), Token(name='LEVEL'), Literal(text='] '), Token(name='message'))
    >>> parse_template("{data}")
    (Token(name='data'),)
    """

    segments: list[Segment] = []
    position = 0
    for match in _TOKEN_RE.finditer(text):
        if match.start() > position:
            segments.append(Literal(text[position : match.start()]))
        segments.append(Token(match.group(1).strip()))
        position = match.end()
    if position < len(text):
        segments.append(Literal(text[position:]))
    return tuple(segments)


def _pad(value: int, width: int = 2) -> str:
    return str(value).zfill(width)


def _timestamp_piece(token: str, moment: datetime) -> str:
    millis = moment.microsecond // 1000
    if token == "yyyy":
        return _pad(moment.year, 4)
    if token == "yy":
        return _pad(moment.year % 100)
    if token == "MM":
        return _pad(moment.month)
    if token == "dd":
        return _pad(moment.day)
    if token == "hh":
        return _pad(moment.hour)
    if token == "mm":
        return _pad(moment.minute)
    if token == "ss":
        return _pad(moment.second)
    if token == "SSS":
        return _pad(millis, 3)
    if token == "SS":
        return _pad(millis // 10)
    return _pad(millis // 100, 1)


def format_timestamp(timestamp: datetime, fmt: str | None = None) -> str:
    """Render ``timestamp`` using a preset name or a token pattern.

    ``iso`` (the default) renders UTC with millisecond precision and a ``Z``
    suffix; ``locale`` uses the platform representation of local time. Any
    other value is a pattern built from ``yyyy yy MM dd hh mm ss SSS SS S``
    rendered in local time; other characters are copied verbatim.

    Examples
    --------
    >>> from datetime import timezone
    >>> moment = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    >>> format_timestamp(moment)
    '2024-01-02T03:04:05.678Z'
    >>> format_timestamp(moment, "mm:ss.SSS|SS|S")
    '04:05.678|67|6'
    """

    preset = (fmt or DEFAULT_TIMESTAMP_FORMAT).strip().lower()
    if preset in ("iso", "toisostring"):
        utc = timestamp if timestamp.tzinfo is None else timestamp.astimezone(timezone.utc)
        return utc.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"
    local = timestamp.astimezone() if timestamp.tzinfo is not None else timestamp
    if preset in ("locale", "tolocalestring"):
        return local.strftime("%c")
    return _TIMESTAMP_TOKEN_RE.sub(lambda match: _timestamp_piece(match.group(0), local), fmt or "")


def _stringify(value: Any) -> str:
    if value is UNDEFINED or value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, default=str)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


class Template:
    """Compiled template made of one or more lines.

    Examples
    --------
    >>> from lib_log_pipeline.domain.levels import LogLevel
    >>> event = LogEvent("app.core", LogLevel.INFO, "hello", data=(1, {"a": 2}))
    >>> Template(["{message}", "{data}"]).render(event)
    ['hello', 1, {'a': 2}]
    >>> Template("[{LEVEL}] ({logger}) {message}").render(event)
    ['[INFO ] (app.core) hello']
    """

    def __init__(self, spec: str | Sequence[str]) -> None:
        lines = [spec] if isinstance(spec, str) else list(spec)
        if not all(isinstance(line, str) for line in lines):
            raise TypeError("template lines must be strings")
        self._source = tuple(lines)
        self._lines = tuple(parse_template(line) for line in lines)

    @property
    def source(self) -> tuple[str, ...]:
        return self._source

    def render(self, event: LogEvent, timestamp_format: str | None = None) -> list[Any]:
        """Return the output tokens produced for ``event``."""

        output: list[Any] = []
        for segments in self._lines:
            if len(segments) == 1 and isinstance(segments[0], Token):
                name = segments[0].name
                if name == DATA_TOKEN:
                    output.extend(event.data)
                    continue
                value = self._resolve(name, event, timestamp_format)
                output.append(None if value is UNDEFINED else value)
                continue
            parts = []
            for segment in segments:
                if isinstance(segment, Literal):
                    parts.append(segment.text)
                else:
                    parts.append(_stringify(self._resolve(segment.name, event, timestamp_format)))
            output.append("".join(parts))
        return output

    @staticmethod
    def _resolve(name: str, event: LogEvent, timestamp_format: str | None) -> Any:
        if name == LEVEL_TOKEN:
            return event.level.label
        if name == TIMESTAMP_TOKEN:
            return format_timestamp(event.timestamp, timestamp_format)
        return resolve_path(event, name)


__all__ = [
    "DATA_TOKEN",
    "DEFAULT_TIMESTAMP_FORMAT",
    "LEVEL_TOKEN",
    "Literal",
    "Segment",
    "TIMESTAMP_TOKEN",
    "Template",
    "Token",
    "format_timestamp",
    "parse_template",
]
