"""Configuration value objects for the pipeline and its plugins.

Purpose
-------
Model the configuration accepted by :meth:`LoggingPipeline.init` as one
value type per plugin kind: a few well-known fields plus an opaque
``options`` mapping carrying kind-specific settings (``allow``/``deny`` for
the match filter, ``format`` for formatters, ``filename`` for the file
appender, and so on).

Contents
--------
* :class:`PluginKind` - appender/filter/formatter discriminator.
* :class:`PluginConfig`, :class:`FilterConfig`, :class:`FormatterConfig`,
  :class:`AppenderConfig` - per-kind configuration records.
* :class:`LoggingConfig` - top-level pipeline configuration.

System Role
-----------
Host applications may pass these objects directly or plain mappings/strings;
the ``coerce`` helpers normalise all three shapes at the boundary so the
rest of the pipeline only handles typed values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar

from .levels import LogLevel

DEFAULT_BUFFER_SIZE = 100
"""Capacity of the pre-init buffer when the configuration does not set one."""


class PluginKind(str, Enum):
    """Kinds of plugins managed by the registry."""

    APPENDER = "appender"
    FILTER = "filter"
    FORMATTER = "formatter"

    def __str__(self) -> str:
        return self.value


_C = TypeVar("_C", bound="PluginConfig")


def _freeze(options: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(options or {}))


@dataclass(slots=True, frozen=True)
class PluginConfig:
    """Fields shared by every plugin configuration.

    Attributes
    ----------
    name:
        Factory name used to look up the plugin in the registry.
    enabled:
        Initial enabled state of the created plugin.
    options:
        Read-only mapping of kind-specific settings.
    """

    _EXTRA_FIELDS: ClassVar[tuple[str, ...]] = ()

    name: str
    enabled: bool = True
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("plugin name must be a non-empty string")
        object.__setattr__(self, "options", _freeze(self.options))

    def option(self, key: str, default: Any = None) -> Any:
        """Return the option stored under ``key`` or ``default``."""

        return self.options.get(key, default)

    @classmethod
    def _split(cls, payload: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        known_fields = {"name", "enabled", *cls._EXTRA_FIELDS}
        fields = {key: value for key, value in payload.items() if key in known_fields}
        options = dict(payload.get("options") or {})
        options.update({key: value for key, value in payload.items() if key not in known_fields and key != "options"})
        return fields, options

    @classmethod
    def coerce(cls: type[_C], value: "str | Mapping[str, Any] | PluginConfig") -> _C:
        """Return ``value`` as an instance of ``cls``.

        Strings become ``cls(name=value)``; mappings keep their known fields and
        move every other key into ``options``.

        Examples
        --------
        >>> FilterConfig.coerce({"name": "match", "deny": {"logger": "noisy"}}).option("deny")
        {'logger': 'noisy'}
        >>> FormatterConfig.coerce("json").name
        'json'
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, PluginConfig):
            return cls(name=value.name, enabled=value.enabled, options=value.options)
        if isinstance(value, Mapping):
            fields, options = cls._split(value)
            return cls(**fields, options=options)
        raise TypeError(f"Cannot build {cls.__name__} from {type(value).__name__}")


@dataclass(slots=True, frozen=True)
class FilterConfig(PluginConfig):
    """Configuration of a filter plugin."""


@dataclass(slots=True, frozen=True)
class FormatterConfig(PluginConfig):
    """Configuration of a formatter plugin."""


@dataclass(slots=True, frozen=True)
class AppenderConfig(PluginConfig):
    """Configuration of an appender plugin.

    Attributes
    ----------
    priority:
        Ordering weight; higher runs first, ``None`` counts as ``0``.
    formatter:
        Optional formatter attached to the appender.
    filters:
        Filters consulted, in order, before the appender writes.
    """

    _EXTRA_FIELDS: ClassVar[tuple[str, ...]] = ("priority", "formatter", "filters")

    priority: float | None = None
    formatter: FormatterConfig | None = None
    filters: tuple[FilterConfig, ...] = ()

    def __post_init__(self) -> None:
        PluginConfig.__post_init__(self)
        if self.priority is not None and not isinstance(self.priority, (int, float)):
            raise ValueError(f"appender priority must be a number, got {self.priority!r}")
        if self.formatter is not None:
            object.__setattr__(self, "formatter", FormatterConfig.coerce(self.formatter))
        object.__setattr__(self, "filters", tuple(FilterConfig.coerce(item) for item in self.filters or ()))


def _default_appenders() -> tuple[AppenderConfig, ...]:
    return (AppenderConfig(name="console", formatter=FormatterConfig(name="default")),)


@dataclass(slots=True, frozen=True)
class LoggingConfig:
    """Top-level configuration consumed by :meth:`LoggingPipeline.init`.

    Attributes
    ----------
    level:
        Default threshold; unresolvable values fall back to ``info``.
    loggers:
        Per-logger level overrides keyed by full logger name.
    appenders:
        Ordered appender configurations; ``None`` selects a single console
        appender with the default formatter. A single name, mapping or
        :class:`AppenderConfig` counts as a one-item sequence.
    buffer_size:
        Capacity of the pre-init buffer.
    """

    level: LogLevel | str | None = LogLevel.INFO
    loggers: Mapping[str, LogLevel | str] = field(default_factory=dict)
    appenders: tuple[AppenderConfig, ...] | None = None
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "loggers", MappingProxyType(dict(self.loggers or {})))
        if isinstance(self.appenders, (str, Mapping, AppenderConfig)):
            object.__setattr__(self, "appenders", (self.appenders,))
        if self.appenders is not None:
            object.__setattr__(self, "appenders", tuple(AppenderConfig.coerce(item) for item in self.appenders))
        if not isinstance(self.buffer_size, int) or self.buffer_size <= 0:
            raise ValueError("buffer_size must be a positive integer")

    @property
    def default_level(self) -> LogLevel:
        return LogLevel.coerce(self.level, LogLevel.INFO) or LogLevel.INFO

    @property
    def effective_appenders(self) -> tuple[AppenderConfig, ...]:
        return self.appenders if self.appenders is not None else _default_appenders()

    @classmethod
    def coerce(cls, value: "LoggingConfig | Mapping[str, Any] | None") -> "LoggingConfig":
        """Return ``value`` as a :class:`LoggingConfig` (``None`` -> defaults)."""

        if value is None:
            return cls()
        if isinstance(value, LoggingConfig):
            return value
        if isinstance(value, Mapping):
            known = {key: value[key] for key in ("level", "loggers", "appenders", "buffer_size") if key in value}
            return cls(**known)
        raise TypeError(f"Cannot build LoggingConfig from {type(value).__name__}")


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "AppenderConfig",
    "FilterConfig",
    "FormatterConfig",
    "LoggingConfig",
    "PluginConfig",
    "PluginKind",
]
