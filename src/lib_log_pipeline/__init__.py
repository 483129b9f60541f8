"""Plugin-based structured logging pipeline.

Loggers gate calls by level, the pipeline buffers until it is initialised
and then fans events out to prioritised appenders, each with optional
filters and a formatter. Most hosts only need :func:`init`,
:func:`get_logger`, and :func:`dispose`; embedding code can create private
:class:`LoggingPipeline` instances instead.
"""

from __future__ import annotations

from .application.registry import DuplicateNameError, FactoryNotFoundError, PluginError, PluginFactory
from .domain.config import AppenderConfig, FilterConfig, FormatterConfig, LoggingConfig, PluginKind
from .domain.events import LogEvent
from .domain.levels import LogLevel
from .runtime import (
    Logger,
    LoggingPipeline,
    NullLogger,
    default_pipeline,
    disable_appender,
    dispose,
    enable_appender,
    flush_appenders,
    get_logger,
    init,
    register_factory,
)

__all__ = [
    "AppenderConfig",
    "DuplicateNameError",
    "FactoryNotFoundError",
    "FilterConfig",
    "FormatterConfig",
    "LogEvent",
    "LogLevel",
    "Logger",
    "LoggingConfig",
    "LoggingPipeline",
    "NullLogger",
    "PluginError",
    "PluginFactory",
    "PluginKind",
    "default_pipeline",
    "disable_appender",
    "dispose",
    "enable_appender",
    "flush_appenders",
    "get_logger",
    "init",
    "register_factory",
]
