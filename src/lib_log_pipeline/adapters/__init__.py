"""Built-in appenders, formatters, and filters.

:func:`builtin_factories` lists the factories a pipeline registers on every
``init`` so the default configuration works without host registration.
"""

from __future__ import annotations

from lib_log_pipeline.application.registry import PluginFactory
from lib_log_pipeline.domain.config import PluginKind

from .console import ConsoleAppender
from .file import FileAppender
from .filters import MatchFilter
from .formatters import JsonFormatter, TemplateFormatter


def builtin_factories() -> tuple[PluginFactory, ...]:
    """Return fresh factories for every built-in plugin.

    Examples
    --------
    >>> sorted(factory.name for factory in builtin_factories())
    ['console', 'default', 'file', 'json', 'match']
    """

    return (
        PluginFactory("console", PluginKind.APPENDER, ConsoleAppender),
        PluginFactory("file", PluginKind.APPENDER, FileAppender),
        PluginFactory("default", PluginKind.FORMATTER, TemplateFormatter),
        PluginFactory("json", PluginKind.FORMATTER, JsonFormatter),
        PluginFactory("match", PluginKind.FILTER, MatchFilter),
    )


__all__ = [
    "ConsoleAppender",
    "FileAppender",
    "JsonFormatter",
    "MatchFilter",
    "TemplateFormatter",
    "builtin_factories",
]
