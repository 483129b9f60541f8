"""Diagnostic channel for failures the pipeline recovers from.

Purpose
-------
Report per-appender write/flush/dispose failures, filter and formatter
errors, and buffer evictions without letting them reach application code.

Contents
--------
* :data:`DiagnosticHook` - optional user callback type.
* :func:`build_diagnostic_emitter` - combine the stdlib logger and the hook.

System Role
-----------
Every recovered error flows through the emitter returned here. Records go
to the ``lib_log_pipeline`` stdlib loggers so hosts can route them with
ordinary :mod:`logging` configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Optional

DiagnosticHook = Optional[Callable[[str, dict[str, Any]], None]]
DiagnosticEmitter = Callable[[str, dict[str, Any]], None]

LOGGER = logging.getLogger("lib_log_pipeline.diagnostics")


def build_diagnostic_emitter(hook: DiagnosticHook = None, *, logger: logging.Logger | None = None) -> DiagnosticEmitter:
    """Return an emitter forwarding ``(event_name, payload)`` to logging and ``hook``.

    Examples
    --------
    >>> seen = []
    >>> emit = build_diagnostic_emitter(lambda name, payload: seen.append((name, payload)))
    >>> emit("write_failed", {"appender": "console"})
    >>> seen
    [('write_failed', {'appender': 'console'})]
    """

    target = logger or LOGGER

    def emit(event_name: str, payload: dict[str, Any]) -> None:
        error = payload.get("error")
        if isinstance(error, BaseException):
            target.warning("%s: %s", event_name, payload, exc_info=error)
        else:
            target.debug("%s: %s", event_name, payload)
        if hook is None:
            return
        try:
            hook(event_name, payload)
        except Exception:  # pragma: no cover - hook failures must not reach callers
            target.exception("diagnostic hook raised while handling %s", event_name)

    return emit


__all__ = ["DiagnosticEmitter", "DiagnosticHook", "build_diagnostic_emitter"]
