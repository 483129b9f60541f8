"""Console appender built on Rich."""

from __future__ import annotations

from .rich_console import ConsoleAppender

__all__ = ["ConsoleAppender"]
