"""Use case routing a single log event to the active appenders.

Purpose
-------
Tie together level eligibility, per-appender filters, and fault isolation
so one misbehaving appender never prevents delivery to the others.

Contents
--------
* :data:`DispatchResult` - diagnostic dictionary returned per event.
* :func:`create_dispatch` - factory returning the routing callable.

System Role
-----------
Application-layer orchestrator invoked by the pipeline for every event that
passed the logger's level gate, including events replayed from the pre-init
buffer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from lib_log_pipeline.domain.events import LogEvent

from ..diagnostics import DiagnosticEmitter
from ..ports.plugins import AppenderPort

DispatchResult = dict[str, Any]
DispatchCallable = Callable[[Sequence[AppenderPort], LogEvent], DispatchResult]


def create_dispatch(emit: DiagnosticEmitter) -> DispatchCallable:
    """Build the routing callable reporting recovered failures through ``emit``.

    Examples
    --------
    >>> from lib_log_pipeline.domain.levels import EMITTING_LEVELS, LogLevel
    >>> class Broken:
    ...     name, enabled, priority, filters = "broken", True, None, ()
    ...     supported_levels = EMITTING_LEVELS
    ...     def write(self, event):
    ...         raise OSError("disk full")
    >>> class Recorder(Broken):
    ...     name = "recorder"
    ...     def __init__(self):
    ...         self.events = []
    ...     def write(self, event):
    ...         self.events.append(event.message)
    >>> recorder = Recorder()
    >>> dispatch = create_dispatch(lambda name, payload: None)
    >>> result = dispatch([Broken(), recorder], LogEvent("app", LogLevel.INFO, "hello"))
    >>> result["delivered"], result["failed"], recorder.events
    (['recorder'], ['broken'], ['hello'])
    """

    def dispatch(appenders: Sequence[AppenderPort], event: LogEvent) -> DispatchResult:
        delivered: list[str] = []
        failed: list[str] = []
        for appender in appenders:
            name = getattr(appender, "name", "?")
            try:
                if not _appender_accepts(appender, event) or not _passes_filters(appender, event, emit):
                    continue
                appender.write(event)
            except Exception as exc:
                failed.append(name)
                emit("write_failed", {"appender": name, "logger": event.logger, "error": exc})
                continue
            delivered.append(name)
        return {"ok": not failed, "delivered": delivered, "failed": failed}

    return dispatch


def _appender_accepts(appender: AppenderPort, event: LogEvent) -> bool:
    return bool(appender.enabled) and event.level in appender.supported_levels


def _passes_filters(appender: AppenderPort, event: LogEvent, emit: DiagnosticEmitter) -> bool:
    """Run the appender's enabled filters; exceptions count as rejection."""

    for event_filter in getattr(appender, "filters", ()):
        if not event_filter.enabled:
            continue
        try:
            if not event_filter.allow(event):
                return False
        except Exception as exc:
            emit("filter_failed", {"appender": appender.name, "filter": event_filter.name, "error": exc})
            return False
    return True


__all__ = ["DispatchCallable", "DispatchResult", "create_dispatch"]
