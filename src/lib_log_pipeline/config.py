"""Environment and ``.env`` configuration helpers.

Purpose
-------
Let hosts and the CLI pick up ``LOG_*`` settings from the process
environment, optionally seeded from the nearest ``.env`` file, without the
pipeline itself ever touching ``os.environ``.

Contents
--------
* :func:`enable_dotenv` - load the nearest ``.env`` once per process.
* :func:`should_use_dotenv` - resolve the CLI flag vs ``LOG_USE_DOTENV``.
* :func:`config_from_env` - overlay ``LOG_*`` variables on a
  :class:`LoggingConfig`.

Environment variables
---------------------
``LOG_LEVEL``
    Default level.
``LOG_LOGGERS``
    Per-logger overrides, ``name=level`` pairs separated by commas.
``LOG_APPENDERS``
    Comma-separated appender names; replaces the configured appenders. Names
    not already configured get the ``default`` formatter.
``LOG_BUFFER_SIZE``
    Pre-init buffer capacity (positive integer).
``LOG_USE_DOTENV``
    Truthy value enables ``.env`` loading in the CLI.
"""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .domain.config import AppenderConfig, FormatterConfig, LoggingConfig

DOTENV_ENV_VAR = "LOG_USE_DOTENV"
LEVEL_ENV_VAR = "LOG_LEVEL"
LOGGERS_ENV_VAR = "LOG_LOGGERS"
APPENDERS_ENV_VAR = "LOG_APPENDERS"
BUFFER_SIZE_ENV_VAR = "LOG_BUFFER_SIZE"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED = False
_DOTENV_PATH: Path | None = None


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    The search walks upward from the current working directory. Later calls
    return the first result.
    """

    global _DOTENV_LOADED, _DOTENV_PATH
    if _DOTENV_LOADED:
        return _DOTENV_PATH
    found = find_dotenv(usecwd=True)
    candidate = Path(found).resolve() if found else None
    if candidate is not None:
        load_dotenv(candidate, override=False)
    _DOTENV_LOADED = True
    _DOTENV_PATH = candidate
    return candidate


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_PATH
    _DOTENV_LOADED = False
    _DOTENV_PATH = None


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return None


def should_use_dotenv(explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Return whether ``.env`` loading is requested.

    An explicit CLI flag wins; otherwise ``LOG_USE_DOTENV`` decides.

    Examples
    --------
    >>> should_use_dotenv(True, "0")
    True
    >>> should_use_dotenv(None, "yes")
    True
    >>> should_use_dotenv(None, None)
    False
    """

    if explicit is not None:
        return explicit
    value = env_value if env_value is not None else os.environ.get(DOTENV_ENV_VAR)
    return bool(_parse_bool(value))


def _parse_loggers(raw: str) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, separator, level = item.partition("=")
        if not separator or not name.strip() or not level.strip():
            raise ValueError(f"{LOGGERS_ENV_VAR} entries must look like name=level, got {item!r}")
        overrides[name.strip()] = level.strip()
    return overrides


def _parse_buffer_size(raw: str) -> int:
    try:
        size = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{BUFFER_SIZE_ENV_VAR} must be an integer, got {raw!r}") from exc
    if size <= 0:
        raise ValueError(f"{BUFFER_SIZE_ENV_VAR} must be positive, got {size}")
    return size


def config_from_env(base: LoggingConfig | None = None, environ: Mapping[str, str] | None = None) -> LoggingConfig:
    """Return ``base`` with ``LOG_*`` overrides applied.

    Examples
    --------
    >>> cfg = config_from_env(environ={"LOG_LEVEL": "debug", "LOG_LOGGERS": "db=trace"})
    >>> cfg.default_level.value, dict(cfg.loggers)
    ('debug', {'db': 'trace'})
    """

    env = os.environ if environ is None else environ
    config = base or LoggingConfig()
    changes: dict[str, object] = {}
    level = env.get(LEVEL_ENV_VAR)
    if level:
        changes["level"] = level.strip()
    loggers = env.get(LOGGERS_ENV_VAR)
    if loggers:
        changes["loggers"] = {**config.loggers, **_parse_loggers(loggers)}
    appenders = env.get(APPENDERS_ENV_VAR)
    if appenders:
        existing = {item.name: item for item in config.effective_appenders}
        names = [name.strip() for name in appenders.split(",") if name.strip()]
        changes["appenders"] = tuple(existing.get(name) or AppenderConfig(name=name, formatter=FormatterConfig(name="default")) for name in names)
    buffer_size = env.get(BUFFER_SIZE_ENV_VAR)
    if buffer_size:
        changes["buffer_size"] = _parse_buffer_size(buffer_size)
    return replace(config, **changes) if changes else config


__all__ = [
    "APPENDERS_ENV_VAR",
    "BUFFER_SIZE_ENV_VAR",
    "DOTENV_ENV_VAR",
    "LEVEL_ENV_VAR",
    "LOGGERS_ENV_VAR",
    "config_from_env",
    "enable_dotenv",
    "should_use_dotenv",
]
