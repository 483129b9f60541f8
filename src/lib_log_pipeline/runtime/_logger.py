"""Logger handles returned by :meth:`LoggingPipeline.get_logger`.

Purpose
-------
Give application code a cheap, never-raising handle per dotted name that
gates calls by its own level before anything is allocated.

Contents
--------
* :class:`Logger` - level-gated handle bound to a pipeline.
* :class:`NullLogger` - inert handle for code that must log unconditionally.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from lib_log_pipeline.domain.levels import LogLevel

if TYPE_CHECKING:  # pragma: no cover
    from ._pipeline import LoggingPipeline

_FATAL = LogLevel.FATAL.rank
_ERROR = LogLevel.ERROR.rank
_WARN = LogLevel.WARN.rank
_INFO = LogLevel.INFO.rank
_DEBUG = LogLevel.DEBUG.rank
_TRACK = LogLevel.TRACK.rank
_TRACE = LogLevel.TRACE.rank

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class Logger:
    """Named handle that forwards enabled calls to its pipeline.

    The ``is_<level>`` flags are ``True`` when an event at that level would
    be emitted. They are recomputed by :meth:`set_level` only, so checking
    them is a plain attribute read.

    Examples
    --------
    >>> logger = Logger(None, "app", LogLevel.ERROR)
    >>> logger.is_fatal, logger.is_error, logger.is_warn
    (True, True, False)
    >>> logger.set_level("off")
    >>> logger.is_enabled
    False
    """

    __slots__ = (
        "_pipeline",
        "_name",
        "_level",
        "_rank",
        "_context",
        "is_fatal",
        "is_error",
        "is_warn",
        "is_info",
        "is_debug",
        "is_track",
        "is_trace",
        "is_enabled",
    )

    def __init__(self, pipeline: "LoggingPipeline | None", name: str, level: LogLevel = LogLevel.INFO) -> None:
        self._pipeline = pipeline
        self._name = name
        self._context: Mapping[str, Any] = _EMPTY
        self.set_level(level)

    def __repr__(self) -> str:
        return f"Logger(name={self._name!r}, level={self._level.value!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def context(self) -> Mapping[str, Any]:
        return self._context

    def set_level(self, level: LogLevel | str) -> None:
        """Change the threshold; unknown level names raise ``ValueError``."""

        resolved = level if isinstance(level, LogLevel) else LogLevel.from_name(level)
        rank = resolved.rank
        self._level = resolved
        self._rank = rank
        self.is_fatal = _FATAL <= rank
        self.is_error = _ERROR <= rank
        self.is_warn = _WARN <= rank
        self.is_info = _INFO <= rank
        self.is_debug = _DEBUG <= rank
        self.is_track = _TRACK <= rank
        self.is_trace = _TRACE <= rank
        self.is_enabled = resolved is not LogLevel.OFF

    def set_context(self, context: Mapping[str, Any] | None) -> None:
        """Replace the context attached to every later event."""

        self._context = MappingProxyType(dict(context)) if context else _EMPTY

    def get_logger(self, child: str) -> "Logger":
        """Return the pipeline logger named ``<name>.<child>``."""

        if self._pipeline is None:
            return Logger(None, f"{self._name}.{child}", self._level)
        return self._pipeline.get_logger(f"{self._name}.{child}")

    def _log(self, level: LogLevel, message: Any, data: tuple[Any, ...]) -> None:
        if self._pipeline is not None:
            self._pipeline.log(self._name, level, message, data, self._context)

    def fatal(self, message: Any, *data: Any) -> None:
        if _FATAL <= self._rank:
            self._log(LogLevel.FATAL, message, data)

    def error(self, message: Any, *data: Any) -> None:
        if _ERROR <= self._rank:
            self._log(LogLevel.ERROR, message, data)

    def warn(self, message: Any, *data: Any) -> None:
        if _WARN <= self._rank:
            self._log(LogLevel.WARN, message, data)

    def info(self, message: Any, *data: Any) -> None:
        if _INFO <= self._rank:
            self._log(LogLevel.INFO, message, data)

    def debug(self, message: Any, *data: Any) -> None:
        if _DEBUG <= self._rank:
            self._log(LogLevel.DEBUG, message, data)

    def track(self, message: Any, *data: Any) -> None:
        if _TRACK <= self._rank:
            self._log(LogLevel.TRACK, message, data)

    def trace(self, message: Any, *data: Any) -> None:
        if _TRACE <= self._rank:
            self._log(LogLevel.TRACE, message, data)

    warning = warn


class NullLogger:
    """Logger stand-in that discards everything.

    Examples
    --------
    >>> null = NullLogger()
    >>> null.info("ignored") is None, null.get_logger("child") is null, null.is_error
    (True, True, False)
    """

    name = ""
    level = LogLevel.OFF
    context: Mapping[str, Any] = _EMPTY
    is_fatal = is_error = is_warn = is_info = is_debug = is_track = is_trace = is_enabled = False

    def set_level(self, level: LogLevel | str) -> None:
        """Ignored."""

    def set_context(self, context: Mapping[str, Any] | None) -> None:
        """Ignored."""

    def get_logger(self, child: str) -> "NullLogger":
        return self

    def _discard(self, message: Any, *data: Any) -> None:
        return None

    fatal = error = warn = warning = info = debug = track = trace = _discard


__all__ = ["Logger", "NullLogger"]
