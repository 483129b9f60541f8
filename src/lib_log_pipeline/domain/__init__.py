"""Domain entities and value objects used by the logging pipeline."""

from __future__ import annotations

from .config import AppenderConfig, FilterConfig, FormatterConfig, LoggingConfig, PluginConfig, PluginKind
from .events import LogEvent
from .levels import EMITTING_LEVELS, LogLevel
from .paths import UNDEFINED, deep_equal, resolve_path
from .ring_buffer import RingBuffer
from .template import Template, format_timestamp, parse_template

__all__ = [
    "EMITTING_LEVELS",
    "UNDEFINED",
    "AppenderConfig",
    "FilterConfig",
    "FormatterConfig",
    "LogEvent",
    "LogLevel",
    "LoggingConfig",
    "PluginConfig",
    "PluginKind",
    "RingBuffer",
    "Template",
    "deep_equal",
    "format_timestamp",
    "parse_template",
    "resolve_path",
]
