"""State shared by the built-in appenders."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from lib_log_pipeline.application.diagnostics import DiagnosticEmitter
from lib_log_pipeline.application.ports.plugins import FilterPort, FormatterPort
from lib_log_pipeline.domain.config import AppenderConfig, PluginKind
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.levels import EMITTING_LEVELS, LogLevel

from ._formatting import render_tokens


class BaseAppender:
    """Configuration and formatting shared by appenders."""

    name = "appender"
    version = "1.0.0"
    kind = PluginKind.APPENDER
    supported_levels: frozenset[LogLevel] = EMITTING_LEVELS

    def __init__(self) -> None:
        self.enabled = True
        self.priority: float | None = None
        self.filters: tuple[FilterPort, ...] = ()
        self.formatter: FormatterPort | None = None
        self._config: AppenderConfig | None = None
        self._emit: DiagnosticEmitter | None = None

    def init(
        self,
        config: AppenderConfig,
        formatter: FormatterPort | None = None,
        filters: Sequence[FilterPort] = (),
    ) -> None:
        self._config = config
        self.name = config.name
        self.enabled = config.enabled
        self.priority = config.priority
        self.formatter = formatter
        self.filters = tuple(filters)

    def bind_diagnostics(self, emit: DiagnosticEmitter) -> None:
        """Report formatter failures through ``emit``."""
        self._emit = emit

    def option(self, key: str, default: Any = None) -> Any:
        return self._config.option(key, default) if self._config is not None else default

    def render(self, event: LogEvent) -> list[Any]:
        return render_tokens(self.formatter, event, self._emit)

    def flush(self) -> None:
        """Nothing buffered by default."""

    def dispose(self) -> None:
        """Nothing to release by default."""


__all__ = ["BaseAppender"]
