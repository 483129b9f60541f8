"""Application use cases composed by the runtime."""

from __future__ import annotations

from .dispatch import DispatchCallable, DispatchResult, create_dispatch
from .shutdown import create_shutdown, flush_appenders

__all__ = ["DispatchCallable", "DispatchResult", "create_dispatch", "create_shutdown", "flush_appenders"]
