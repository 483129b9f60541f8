from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from lib_log_pipeline.application.registry import PluginFactory
from lib_log_pipeline.domain.config import AppenderConfig, PluginKind
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.levels import EMITTING_LEVELS, LogLevel
from lib_log_pipeline.runtime import LoggingPipeline, replace_default_pipeline

FIXED_TIMESTAMP = datetime(2025, 9, 23, 12, 0, 1, 234000, tzinfo=timezone.utc)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200, color_system=None, force_terminal=False)


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    def _make(
        message: Any = "hello",
        *,
        logger: str = "tests",
        level: LogLevel = LogLevel.INFO,
        data: Sequence[Any] = (),
        context: dict[str, Any] | None = None,
        timestamp: datetime = FIXED_TIMESTAMP,
    ) -> LogEvent:
        return LogEvent(logger, level, message, tuple(data), context or {}, timestamp)

    return _make


class SpyAppender:
    """Appender recording lifecycle calls into a shared journal."""

    version = "1.0.0"
    kind = PluginKind.APPENDER

    def __init__(
        self,
        name: str,
        journal: list[tuple[str, str, Any]],
        *,
        fail_write: bool = False,
        fail_flush: bool = False,
        fail_dispose: bool = False,
        supported_levels: frozenset[LogLevel] = EMITTING_LEVELS,
    ) -> None:
        self.name = name
        self.journal = journal
        self.enabled = True
        self.priority: float | None = None
        self.filters: tuple[Any, ...] = ()
        self.formatter: Any = None
        self.supported_levels = supported_levels
        self.events: list[LogEvent] = []
        self._fail_write = fail_write
        self._fail_flush = fail_flush
        self._fail_dispose = fail_dispose

    def init(self, config: AppenderConfig, formatter: Any = None, filters: Sequence[Any] = ()) -> None:
        self.enabled = config.enabled
        self.priority = config.priority
        self.formatter = formatter
        self.filters = tuple(filters)
        self.journal.append(("init", self.name, config))

    def write(self, event: LogEvent) -> None:
        if self._fail_write:
            raise OSError(f"{self.name} cannot write")
        self.events.append(event)
        self.journal.append(("write", self.name, event.message))

    def flush(self) -> None:
        self.journal.append(("flush", self.name, None))
        if self._fail_flush:
            raise OSError(f"{self.name} cannot flush")

    def dispose(self) -> None:
        self.journal.append(("dispose", self.name, None))
        if self._fail_dispose:
            raise OSError(f"{self.name} cannot dispose")


@pytest.fixture
def journal() -> list[tuple[str, str, Any]]:
    return []


@pytest.fixture
def spy_factory(journal: list[tuple[str, str, Any]]) -> Callable[..., PluginFactory]:
    """Return a builder of appender factories whose instances share ``journal``."""

    created: dict[str, list[SpyAppender]] = {}

    def _build(name: str, **behaviour: Any) -> PluginFactory:
        def _create() -> SpyAppender:
            appender = SpyAppender(name, journal, **behaviour)
            created.setdefault(name, []).append(appender)
            return appender

        return PluginFactory(name, PluginKind.APPENDER, _create)

    _build.created = created  # type: ignore[attr-defined]
    return _build


@pytest.fixture
def diagnostics() -> list[tuple[str, dict[str, Any]]]:
    return []


@pytest.fixture
def pipeline(diagnostics: list[tuple[str, dict[str, Any]]]) -> LoggingPipeline:
    instance = LoggingPipeline(diagnostic=lambda name, payload: diagnostics.append((name, payload)))
    yield instance
    instance.dispose()


@pytest.fixture
def isolated_default_pipeline() -> LoggingPipeline:
    """Swap in a fresh default pipeline for facade tests."""

    fresh = LoggingPipeline()
    previous = replace_default_pipeline(fresh)
    yield fresh
    fresh.dispose()
    replace_default_pipeline(previous)


@pytest.fixture
def make_spy(journal: list[tuple[str, str, Any]]) -> Callable[..., SpyAppender]:
    """Return a builder of initialised spy appenders sharing ``journal``."""

    def _make(name: str, **behaviour: Any) -> SpyAppender:
        appender = SpyAppender(name, journal, **behaviour)
        appender.init(AppenderConfig(name=name))
        return appender

    return _make
