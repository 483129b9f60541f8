"""Helpers turning formatter output into text shared by the built-in appenders.

Why
---
Console and file appenders must degrade identically when a formatter fails
and must join tokens the same way, so both concerns live in one place.

Contents
--------
* :func:`fallback_tokens` - minimal rendering used when formatting fails.
* :func:`render_tokens` - run a formatter with fallback and diagnostics.
* :func:`stringify_token` / :func:`join_tokens` - token-to-text conversion.
"""

from __future__ import annotations

import json
from typing import Any

from lib_log_pipeline.application.diagnostics import DiagnosticEmitter
from lib_log_pipeline.application.ports.plugins import FormatterPort
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.template import format_timestamp


def fallback_tokens(event: LogEvent) -> list[Any]:
    """Return the single-line rendering used when no formatter output exists.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_pipeline.domain.levels import LogLevel
    >>> event = LogEvent("app", LogLevel.WARN, "careful", timestamp=datetime(2025, 1, 1, tzinfo=timezone.utc))
    >>> fallback_tokens(event)
    ['2025-01-01T00:00:00.000Z WARN  [app] careful']
    """

    return [f"{format_timestamp(event.timestamp)} {event.level.label} [{event.logger}] {stringify_token(event.message)}"]


def render_tokens(formatter: FormatterPort | None, event: LogEvent, emit: DiagnosticEmitter | None = None) -> list[Any]:
    """Return formatter output for ``event``; formatter errors fall back."""

    if formatter is None:
        return fallback_tokens(event) + list(event.data)
    try:
        return list(formatter.format(event))
    except Exception as exc:
        if emit is not None:
            emit("format_failed", {"formatter": getattr(formatter, "name", "?"), "logger": event.logger, "error": exc})
        return fallback_tokens(event)


def stringify_token(token: Any) -> str:
    if isinstance(token, str):
        return token
    if isinstance(token, (dict, list, tuple)):
        try:
            return json.dumps(token, default=str)
        except (TypeError, ValueError):
            return repr(token)
    return str(token)


def join_tokens(tokens: list[Any]) -> str:
    """Join tokens with single spaces, serialising containers as JSON."""

    return " ".join(stringify_token(token) for token in tokens)


__all__ = ["fallback_tokens", "join_tokens", "render_tokens", "stringify_token"]
