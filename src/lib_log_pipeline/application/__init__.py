"""Application layer: plugin registry, ports, and dispatch use cases."""

from __future__ import annotations

from .diagnostics import DiagnosticHook, build_diagnostic_emitter
from .registry import DuplicateNameError, FactoryNotFoundError, PluginError, PluginFactory, PluginRegistry

__all__ = [
    "DiagnosticHook",
    "DuplicateNameError",
    "FactoryNotFoundError",
    "PluginError",
    "PluginFactory",
    "PluginRegistry",
    "build_diagnostic_emitter",
]
