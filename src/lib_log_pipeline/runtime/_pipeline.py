"""Composition root and runtime state of one logging pipeline.

Purpose
-------
Own the plugin registry, the ordered appender list, the logger cache, and
the pre-init buffer; translate :class:`LoggingConfig` into live plugins.

Contents
--------
* :class:`LoggingPipeline` - the instantiable pipeline.

System Role
-----------
Loggers call :meth:`LoggingPipeline.log`; events arriving before
:meth:`LoggingPipeline.init` completes wait in a bounded buffer that is
replayed, oldest first, once the appenders exist. A single re-entrant lock
serialises buffering, routing, and every mutation of pipeline state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from threading import RLock
from typing import Any

from lib_log_pipeline.adapters import builtin_factories
from lib_log_pipeline.application.diagnostics import DiagnosticHook, build_diagnostic_emitter
from lib_log_pipeline.application.ports.plugins import AppenderPort, FilterPort, FormatterPort, PluginFactoryPort
from lib_log_pipeline.application.registry import PluginRegistry
from lib_log_pipeline.application.use_cases.dispatch import DispatchResult, create_dispatch
from lib_log_pipeline.application.use_cases.shutdown import create_shutdown, flush_appenders
from lib_log_pipeline.domain.config import DEFAULT_BUFFER_SIZE, AppenderConfig, LoggingConfig, PluginKind
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.levels import LogLevel
from lib_log_pipeline.domain.ring_buffer import RingBuffer

from ._logger import Logger

logger = logging.getLogger(__name__)


def _priority(appender: AppenderPort) -> float:
    priority = getattr(appender, "priority", None)
    return 0 if priority is None else priority


class LoggingPipeline:
    """Route log events from named loggers to configured appenders.

    Examples
    --------
    >>> pipeline = LoggingPipeline()
    >>> log = pipeline.get_logger("app")
    >>> log.info("queued before init")
    >>> pipeline.buffered
    1
    >>> pipeline.init({"appenders": []})
    >>> pipeline.buffered, pipeline.initialised
    (0, True)
    >>> pipeline.dispose()
    """

    def __init__(self, *, diagnostic: DiagnosticHook = None, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._lock = RLock()
        self._diagnostic = build_diagnostic_emitter(diagnostic)
        self._registry = PluginRegistry(diagnostic=self._diagnostic)
        self._dispatch = create_dispatch(self._diagnostic)
        self._reset_plugins = create_shutdown(registry=self._registry, emit=self._diagnostic, clear_factories=False)
        self._teardown = create_shutdown(registry=self._registry, emit=self._diagnostic, clear_factories=True)
        self._buffer = RingBuffer(capacity=buffer_size)
        self._appenders: list[AppenderPort] = []
        self._loggers: dict[str, Logger] = {}
        self._overrides: dict[str, LogLevel] = {}
        self._default_level = LogLevel.INFO
        self._initialised = False

    # ------------------------------------------------------------------ state
    @property
    def initialised(self) -> bool:
        with self._lock:
            return self._initialised

    @property
    def default_level(self) -> LogLevel:
        return self._default_level

    @property
    def appenders(self) -> tuple[AppenderPort, ...]:
        """Active appenders in dispatch order."""
        with self._lock:
            return tuple(self._appenders)

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    @property
    def buffered(self) -> int:
        """Number of events waiting for :meth:`init`."""
        with self._lock:
            return len(self._buffer)

    # ------------------------------------------------------------- lifecycle
    def init(self, config: LoggingConfig | Mapping[str, Any] | None = None) -> None:
        """Reset the pipeline and build it from ``config``.

        Raises
        ------
        FactoryNotFoundError
            When an appender, formatter, or filter name has no factory of the
            matching kind. Buffered events stay queued for the next attempt.
        """

        resolved = LoggingConfig.coerce(config)
        with self._lock:
            self._reset()
            self._register_builtins()
            self._default_level = resolved.default_level
            self._overrides = {
                name: LogLevel.coerce(level, self._default_level) or self._default_level
                for name, level in resolved.loggers.items()
            }
            pending = self._buffer.drain()
            self._buffer = RingBuffer(capacity=resolved.buffer_size)
            try:
                appenders = [self._build_appender(item) for item in resolved.effective_appenders]
            except Exception:
                self._buffer.push_all(pending)
                raise
            self._appenders = sorted(appenders, key=_priority, reverse=True)
            self._initialised = True
            logger.debug("pipeline initialised with appenders %s", [appender.name for appender in self._appenders])
            for event in pending:
                try:
                    self._route(event)
                except Exception as exc:
                    self._diagnostic("emit_failed", {"logger": event.logger, "error": exc})

    def dispose(self) -> None:
        """Flush and dispose every plugin, forget factories, and go inert."""

        with self._lock:
            self._teardown(self._appenders)
            self._appenders = []
            self._loggers.clear()
            self._overrides = {}
            self._default_level = LogLevel.INFO
            self._initialised = False

    def _reset(self) -> None:
        self._reset_plugins(self._appenders)
        self._appenders = []
        self._loggers.clear()
        self._overrides = {}
        self._default_level = LogLevel.INFO
        self._initialised = False

    def _register_builtins(self) -> None:
        for factory in builtin_factories():
            if not self._registry.has_factory(factory.name):
                self._registry.register_factory(factory)

    def _build_appender(self, config: AppenderConfig) -> AppenderPort:
        formatter: FormatterPort | None = None
        if config.formatter is not None:
            formatter = self._registry.create_plugin(PluginKind.FORMATTER, config.formatter)
            formatter.init(config.formatter)
        filters: list[FilterPort] = []
        for filter_config in config.filters:
            event_filter = self._registry.create_plugin(PluginKind.FILTER, filter_config)
            event_filter.init(filter_config)
            filters.append(event_filter)
        appender = self._registry.create_plugin(PluginKind.APPENDER, config)
        appender.init(config, formatter, filters)
        bind = getattr(appender, "bind_diagnostics", None)
        if callable(bind):
            bind(self._diagnostic)
        return appender

    # --------------------------------------------------------------- loggers
    def get_logger(self, name: str | Sequence[str]) -> Logger:
        """Return the cached logger for ``name`` (dotted or a list of parts)."""

        full_name = name if isinstance(name, str) else ".".join(str(part) for part in name)
        if not full_name:
            raise ValueError("logger name must not be empty")
        with self._lock:
            existing = self._loggers.get(full_name)
            if existing is None:
                existing = Logger(self, full_name, self._overrides.get(full_name, self._default_level))
                self._loggers[full_name] = existing
            return existing

    def log(
        self,
        logger_name: str,
        level: LogLevel,
        message: Any,
        data: Sequence[Any] = (),
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Build an event and hand it to :meth:`emit`; never raises."""

        try:
            self.emit(LogEvent(logger_name, level, message, tuple(data), context or {}))
        except Exception as exc:
            self._diagnostic("emit_failed", {"logger": logger_name, "error": exc})

    def emit(self, event: LogEvent) -> DispatchResult | None:
        """Dispatch ``event`` or buffer it while the pipeline is not initialised."""

        with self._lock:
            if not self._initialised:
                if self._buffer.push(event):
                    self._diagnostic("buffer_overflow", {"capacity": self._buffer.capacity, "dropped": self._buffer.dropped})
                return None
            return self._route(event)

    def _route(self, event: LogEvent) -> DispatchResult:
        return self._dispatch(self._appenders, event)

    # -------------------------------------------------------------- controls
    def register_factory(self, factory: PluginFactoryPort) -> None:
        """Register ``factory``; duplicate names raise :class:`DuplicateNameError`."""

        with self._lock:
            self._registry.register_factory(factory)

    def get_appender(self, name: str) -> AppenderPort | None:
        with self._lock:
            return next((appender for appender in self._appenders if appender.name == name), None)

    def enable_appender(self, name: str) -> None:
        with self._lock:
            appender = self.get_appender(name)
            if appender is not None:
                appender.enabled = True

    def disable_appender(self, name: str) -> None:
        with self._lock:
            appender = self.get_appender(name)
            if appender is not None:
                appender.enabled = False

    def enable_filter(self, name: str, appender_name: str | None = None) -> None:
        """Enable filter ``name`` on one appender or on every appender."""
        self._toggle_filter(name, appender_name, True)

    def disable_filter(self, name: str, appender_name: str | None = None) -> None:
        self._toggle_filter(name, appender_name, False)

    def _toggle_filter(self, name: str, appender_name: str | None, enabled: bool) -> None:
        with self._lock:
            for appender in self._appenders:
                if appender_name is not None and appender.name != appender_name:
                    continue
                for event_filter in getattr(appender, "filters", ()):
                    if event_filter.name == name:
                        event_filter.enabled = enabled

    def flush_appender(self, name: str) -> bool:
        """Flush one appender; return ``False`` when it is absent or failed."""

        with self._lock:
            appender = self.get_appender(name)
            if appender is None:
                return False
            return not flush_appenders([appender], self._diagnostic)

    def flush_appenders(self) -> list[str]:
        """Flush every appender; return the names of those that failed."""

        with self._lock:
            return flush_appenders(self._appenders, self._diagnostic)


__all__ = ["LoggingPipeline"]
