"""Rich-powered console appender registered as ``console``.

Purpose
-------
Human-facing sink: print the tokens produced by the attached formatter as one
line per event, styled per severity through :mod:`rich`.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`ConsoleAppender` - the built-in ``console`` appender.

System Role
-----------
Selected by default when a configuration names no appenders. Options:
``force_color``, ``no_color`` and ``styles`` (level name -> Rich style).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console

from lib_log_pipeline.application.ports.plugins import FilterPort, FormatterPort
from lib_log_pipeline.domain.config import AppenderConfig
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.levels import LogLevel

from .._base import BaseAppender
from .._formatting import join_tokens

#: Default Rich styles keyed by :class:`LogLevel` severity.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.FATAL: "bold red",
    LogLevel.ERROR: "red",
    LogLevel.WARN: "yellow",
    LogLevel.INFO: "cyan",
    LogLevel.DEBUG: "dim",
    LogLevel.TRACK: "magenta",
    LogLevel.TRACE: "dim italic",
}


def _merge_styles(overrides: Mapping[Any, str] | None) -> dict[LogLevel, str]:
    merged = dict(_STYLE_MAP)
    for key, value in (overrides or {}).items():
        level = LogLevel.coerce(key, None)
        if level is not None and level is not LogLevel.OFF:
            merged[level] = value
    return merged


class ConsoleAppender(BaseAppender):
    """Render log events through a Rich console with per-level styles."""

    name = "console"

    def __init__(self, *, console: Console | None = None) -> None:
        super().__init__()
        self._console = console
        self._style_map = dict(_STYLE_MAP)
        self._no_color = False

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console()
        return self._console

    def init(
        self,
        config: AppenderConfig,
        formatter: FormatterPort | None = None,
        filters: Sequence[FilterPort] = (),
    ) -> None:
        super().init(config, formatter, filters)
        self._no_color = bool(self.option("no_color", False))
        if self._console is None:
            self._console = Console(force_terminal=bool(self.option("force_color", False)) or None, no_color=self._no_color)
        self._style_map = _merge_styles(self.option("styles"))

    def write(self, event: LogEvent) -> None:
        """Print ``event`` as a single styled line.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True, width=200)
        >>> appender = ConsoleAppender(console=console)
        >>> appender.init(AppenderConfig(name="console"))
        >>> appender.write(LogEvent("app", LogLevel.INFO, "msg"))
        >>> "[app] msg" in console.export_text()
        True
        """
        style = "" if self._no_color else self._style_map.get(event.level, "")
        line = join_tokens(self.render(event))
        self.console.print(line, style=style, highlight=False, markup=False, soft_wrap=True)

    def flush(self) -> None:
        stream = getattr(self.console, "file", None)
        flush = getattr(stream, "flush", None)
        if callable(flush):
            flush()


__all__ = ["ConsoleAppender"]
