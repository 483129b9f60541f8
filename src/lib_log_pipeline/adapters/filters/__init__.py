"""Built-in filter plugins."""

from __future__ import annotations

from .match import MatchFilter

__all__ = ["MatchFilter"]
