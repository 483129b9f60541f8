"""Plugin registry tracking factories and the instances they create.

Purpose
-------
Map plugin names to factories, create plugins by kind, and dispose every
created instance when the pipeline is reset or torn down.

Contents
--------
* :class:`PluginError`, :class:`DuplicateNameError`,
  :class:`FactoryNotFoundError` - configuration errors surfaced to callers.
* :class:`PluginFactory` - class-backed factory used by the built-ins.
* :class:`PluginRegistry` - the registry itself.

System Role
-----------
Owned by :class:`lib_log_pipeline.runtime.LoggingPipeline`. Registration and
lookup errors propagate; disposal errors are reported and collected.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from lib_log_pipeline.domain.config import AppenderConfig, FilterConfig, FormatterConfig, PluginConfig, PluginKind

from .diagnostics import DiagnosticEmitter, build_diagnostic_emitter
from .ports.plugins import PluginFactoryPort, PluginPort


class PluginError(RuntimeError):
    """Base class for plugin configuration errors."""


class DuplicateNameError(PluginError):
    """Raised when a factory name is registered twice."""


class FactoryNotFoundError(PluginError):
    """Raised when no factory of the requested name and kind exists."""


_CONFIG_TYPES: Mapping[PluginKind, type[PluginConfig]] = {
    PluginKind.APPENDER: AppenderConfig,
    PluginKind.FILTER: FilterConfig,
    PluginKind.FORMATTER: FormatterConfig,
}


def coerce_plugin_config(kind: PluginKind, name_or_config: str | Mapping[str, Any] | PluginConfig) -> PluginConfig:
    """Return ``name_or_config`` as the configuration type matching ``kind``."""

    return _CONFIG_TYPES[kind].coerce(name_or_config)


@dataclass(frozen=True)
class PluginFactory:
    """Factory constructing ``plugin_class`` for a registered name.

    Examples
    --------
    >>> class Quiet:
    ...     name, version, kind = "quiet", "1.0.0", PluginKind.FILTER
    ...     def dispose(self): pass
    >>> factory = PluginFactory("quiet", PluginKind.FILTER, Quiet)
    >>> isinstance(factory.create(FilterConfig(name="quiet")), Quiet)
    True
    """

    name: str
    kind: PluginKind
    plugin_class: Callable[[], PluginPort]
    version: str = "1.0.0"

    def create(self, config: PluginConfig) -> PluginPort:
        return self.plugin_class()


class PluginRegistry:
    """Registry of plugin factories and the instances created from them."""

    def __init__(self, *, diagnostic: DiagnosticEmitter | None = None) -> None:
        self._factories: dict[str, PluginFactoryPort] = {}
        self._instances: list[PluginPort] = []
        self._emit = diagnostic or build_diagnostic_emitter()

    @property
    def factories(self) -> Mapping[str, PluginFactoryPort]:
        return dict(self._factories)

    @property
    def instances(self) -> tuple[PluginPort, ...]:
        return tuple(self._instances)

    def has_factory(self, name: str) -> bool:
        return name in self._factories

    def register_factory(self, factory: PluginFactoryPort) -> None:
        """Register ``factory``; names are unique regardless of kind."""

        if factory.name in self._factories:
            raise DuplicateNameError(f"Plugin factory with name {factory.name!r} is already registered")
        self._factories[factory.name] = factory

    def get_factory(self, name: str, kind: PluginKind) -> PluginFactoryPort | None:
        """Return the factory registered under ``name`` when it creates ``kind``."""

        factory = self._factories.get(name)
        if factory is None or factory.kind != kind:
            return None
        return factory

    def create_plugin(self, kind: PluginKind, name_or_config: str | Mapping[str, Any] | PluginConfig) -> PluginPort:
        """Create and track a plugin of ``kind`` from a name or configuration.

        Raises
        ------
        FactoryNotFoundError
            When no factory of that name exists or it creates another kind.
        """

        config = coerce_plugin_config(kind, name_or_config)
        factory = self.get_factory(config.name, kind)
        if factory is None:
            raise FactoryNotFoundError(f"Plugin factory of kind {kind.value!r} with name {config.name!r} not found")
        plugin = factory.create(config)
        self._instances.append(plugin)
        return plugin

    def dispose_all(self) -> list[BaseException]:
        """Dispose tracked instances in creation order and forget them.

        Failures are reported through the diagnostic channel and returned;
        they never interrupt disposal of the remaining instances.
        """

        errors: list[BaseException] = []
        instances, self._instances = self._instances, []
        for plugin in instances:
            try:
                plugin.dispose()
            except Exception as exc:
                errors.append(exc)
                self._emit("dispose_failed", {"plugin": getattr(plugin, "name", "?"), "error": exc})
        return errors

    def clear_factories(self) -> None:
        """Drop every registered factory; created instances are untouched."""

        self._factories.clear()


__all__ = [
    "DuplicateNameError",
    "FactoryNotFoundError",
    "PluginError",
    "PluginFactory",
    "PluginRegistry",
    "coerce_plugin_config",
]
