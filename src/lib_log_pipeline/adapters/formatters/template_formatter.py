"""Template formatter registered as ``default``.

Purpose
-------
Render events through :class:`lib_log_pipeline.domain.template.Template` when
a ``format`` option is configured, and through the fixed default layout
otherwise.

Contents
--------
* :data:`DEFAULT_LAYOUT` - template lines of the built-in layout.
* :class:`TemplateFormatter` - the ``default`` formatter plugin.
"""

from __future__ import annotations

import json
from typing import Any

from lib_log_pipeline.domain.config import FormatterConfig, PluginKind
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.template import DEFAULT_TIMESTAMP_FORMAT, Template

DEFAULT_LAYOUT = ("{timestamp}", "{LEVEL}", "[{logger}]", "{message}", "{data}")


class TemplateFormatter:
    """Format events into an ordered token list.

    Options
    -------
    format:
        Template string or list of template lines. Absent means the default
        layout: timestamp, level label, bracketed logger, message and
        data items as separate tokens, then the context as JSON when non-empty.
    timestamp_format:
        ``iso`` (default), ``locale`` or a token pattern such as ``hh:mm:ss``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_pipeline.domain.levels import LogLevel
    >>> formatter = TemplateFormatter()
    >>> formatter.init(FormatterConfig(name="default"))
    >>> event = LogEvent("app", LogLevel.INFO, "ready", data=(42,), context={"user": "u1"},
    ...                  timestamp=datetime(2025, 3, 4, 5, 6, 7, tzinfo=timezone.utc))
    >>> formatter.format(event)
    ['2025-03-04T05:06:07.000Z', 'INFO ', '[app]', 'ready', 42, '{"user": "u1"}']
    """

    name = "default"
    version = "1.0.0"
    kind = PluginKind.FORMATTER

    def __init__(self) -> None:
        self._template: Template | None = None
        self._layout = Template(DEFAULT_LAYOUT)
        self._timestamp_format = DEFAULT_TIMESTAMP_FORMAT

    def init(self, config: FormatterConfig) -> None:
        spec = config.option("format")
        self._template = Template(spec) if spec else None
        self._timestamp_format = config.option("timestamp_format") or DEFAULT_TIMESTAMP_FORMAT

    def format(self, event: LogEvent) -> list[Any]:
        if self._template is not None:
            return self._template.render(event, self._timestamp_format)
        tokens = self._layout.render(event, self._timestamp_format)
        if event.context:
            tokens.append(json.dumps(dict(event.context), default=str))
        return tokens

    def dispose(self) -> None:
        self._template = None


__all__ = ["DEFAULT_LAYOUT", "TemplateFormatter"]
