"""Built-in formatter plugins."""

from __future__ import annotations

from .json_formatter import JsonFormatter
from .template_formatter import TemplateFormatter

__all__ = ["JsonFormatter", "TemplateFormatter"]
