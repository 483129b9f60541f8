"""Process-wide default pipeline used by the module-level facade."""

from __future__ import annotations

from threading import RLock

from ._pipeline import LoggingPipeline

_STATE: LoggingPipeline | None = None
_STATE_LOCK = RLock()


def default_pipeline() -> LoggingPipeline:
    """Return the default pipeline, creating it on first use."""

    global _STATE
    with _STATE_LOCK:
        if _STATE is None:
            _STATE = LoggingPipeline()
        return _STATE


def replace_default_pipeline(pipeline: LoggingPipeline | None) -> LoggingPipeline | None:
    """Install ``pipeline`` as the default and return the previous one."""

    global _STATE
    with _STATE_LOCK:
        previous, _STATE = _STATE, pipeline
        return previous


__all__ = ["default_pipeline", "replace_default_pipeline"]
