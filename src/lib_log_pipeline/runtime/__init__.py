"""Runtime facade over a process-wide default :class:`LoggingPipeline`.

Purpose
-------
Offer ``init``/``get_logger``/``dispose`` as plain functions for hosts that
need only one pipeline, while tests and embedding applications can build
their own :class:`LoggingPipeline` instances.

Contents
--------
* :class:`LoggingPipeline`, :class:`Logger`, :class:`NullLogger`.
* Facade functions delegating to :func:`default_pipeline`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from lib_log_pipeline.application.ports.plugins import PluginFactoryPort
from lib_log_pipeline.domain.config import LoggingConfig

from ._logger import Logger, NullLogger
from ._pipeline import LoggingPipeline
from ._state import default_pipeline, replace_default_pipeline


def init(config: LoggingConfig | Mapping[str, Any] | None = None) -> None:
    """Initialise (or re-initialise) the default pipeline."""

    default_pipeline().init(config)


def get_logger(name: str | Sequence[str]) -> Logger:
    """Return a logger from the default pipeline; usable before :func:`init`."""

    return default_pipeline().get_logger(name)


def dispose() -> None:
    """Flush and tear down the default pipeline."""

    default_pipeline().dispose()


def register_factory(factory: PluginFactoryPort) -> None:
    default_pipeline().register_factory(factory)


def enable_appender(name: str) -> None:
    default_pipeline().enable_appender(name)


def disable_appender(name: str) -> None:
    default_pipeline().disable_appender(name)


def flush_appenders() -> list[str]:
    return default_pipeline().flush_appenders()


__all__ = [
    "Logger",
    "LoggingPipeline",
    "NullLogger",
    "default_pipeline",
    "disable_appender",
    "dispose",
    "enable_appender",
    "flush_appenders",
    "get_logger",
    "init",
    "register_factory",
    "replace_default_pipeline",
]
