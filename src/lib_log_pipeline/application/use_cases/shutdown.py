"""Flush and teardown orchestration for the logging pipeline.

Purpose
-------
Provide the flush routine shared by runtime flush controls, reset, and
disposal, plus the teardown sequence that releases every plugin.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..diagnostics import DiagnosticEmitter
from ..ports.plugins import AppenderPort
from ..registry import PluginRegistry


def flush_appenders(appenders: Sequence[AppenderPort], emit: DiagnosticEmitter) -> list[str]:
    """Flush every appender; return the names of those that failed."""

    failed: list[str] = []
    for appender in appenders:
        try:
            appender.flush()
        except Exception as exc:
            failed.append(appender.name)
            emit("flush_failed", {"appender": appender.name, "error": exc})
    return failed


def create_shutdown(
    *,
    registry: PluginRegistry,
    emit: DiagnosticEmitter,
    clear_factories: bool,
) -> Callable[[Sequence[AppenderPort]], None]:
    """Return a callable flushing ``appenders`` then disposing all plugins."""

    def shutdown(appenders: Sequence[AppenderPort]) -> None:
        """Flush appenders, dispose instances, optionally drop factories."""
        flush_appenders(appenders, emit)
        registry.dispose_all()
        if clear_factories:
            registry.clear_factories()

    return shutdown


__all__ = ["create_shutdown", "flush_appenders"]
