"""Plugin ports describing appenders, filters, formatters, and factories.

Purpose
-------
Define the narrow contracts the pipeline depends on so built-in and
third-party plugins are interchangeable.

Contents
--------
* :class:`PluginPort` - descriptor and lifecycle shared by every plugin.
* :class:`AppenderPort`, :class:`FilterPort`, :class:`FormatterPort` - the
  three plugin kinds.
* :class:`PluginFactoryPort` - creates a plugin instance from its config.

System Role
-----------
Clarifies the boundary between the pipeline and plugin implementations; the
registry and dispatch use case never import concrete adapters.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from lib_log_pipeline.domain.config import AppenderConfig, PluginConfig, PluginKind
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.levels import LogLevel


@runtime_checkable
class PluginPort(Protocol):
    """Descriptor and teardown hook common to every plugin."""

    name: str
    version: str
    kind: PluginKind

    def dispose(self) -> None:
        """Release resources held by the plugin."""


@runtime_checkable
class FilterPort(PluginPort, Protocol):
    """Decide whether an event may reach an appender."""

    enabled: bool

    def init(self, config: PluginConfig) -> None:
        """Apply ``config`` before first use."""

    def allow(self, event: LogEvent) -> bool:
        """Return ``True`` when ``event`` is eligible."""


@runtime_checkable
class FormatterPort(PluginPort, Protocol):
    """Render an event into an ordered sequence of output tokens."""

    def init(self, config: PluginConfig) -> None:
        """Apply ``config`` before first use."""

    def format(self, event: LogEvent) -> list[Any]:
        """Return the output tokens for ``event``."""


@runtime_checkable
class AppenderPort(PluginPort, Protocol):
    """Deliver formatted events to a sink.

    ``filters`` is optional; the pipeline treats a missing attribute as no
    filters.
    """

    enabled: bool
    priority: float | None
    supported_levels: frozenset[LogLevel]
    filters: Sequence[FilterPort]

    def init(
        self,
        config: AppenderConfig,
        formatter: FormatterPort | None = None,
        filters: Sequence[FilterPort] = (),
    ) -> None:
        """Attach configuration, formatter, and filters."""

    def write(self, event: LogEvent) -> None:
        """Deliver ``event``; may raise, the pipeline isolates failures."""

    def flush(self) -> None:
        """Push buffered output to the sink."""


@runtime_checkable
class PluginFactoryPort(Protocol):
    """Create plugin instances for one registered name."""

    name: str
    version: str
    kind: PluginKind

    def create(self, config: PluginConfig) -> PluginPort:
        """Return a new, not yet initialised plugin."""


__all__ = ["AppenderPort", "FilterPort", "FormatterPort", "PluginFactoryPort", "PluginPort"]
