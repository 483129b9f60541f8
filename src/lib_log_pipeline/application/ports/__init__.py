"""Ports (protocols) the application layer depends on."""

from __future__ import annotations

from .plugins import AppenderPort, FilterPort, FormatterPort, PluginFactoryPort, PluginPort

__all__ = ["AppenderPort", "FilterPort", "FormatterPort", "PluginFactoryPort", "PluginPort"]
