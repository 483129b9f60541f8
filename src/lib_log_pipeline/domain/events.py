"""The :class:`LogEvent` record passed from loggers to appenders.

Field names double as the dot-path roots understood by filters and
templates: ``logger``, ``level``, ``message``, ``data``, ``context`` and
``timestamp``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .levels import LogLevel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValueError(f"event timestamps need a timezone, got naive {moment!r}")
    return moment.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEvent:
    """One log call, frozen at emission time.

    Attributes
    ----------
    logger:
        Full dotted name of the logger that produced the event.
    level:
        Severity; every level except ``off`` is allowed.
    message:
        First argument of the log call, of any type.
    data:
        The remaining positional arguments, in call order.
    context:
        Read-only copy of the logger context when the call was made.
    timestamp:
        Emission time converted to UTC.
    """

    logger: str
    level: LogLevel
    message: Any
    data: tuple[Any, ...] = ()
    context: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if self.level is LogLevel.OFF:
            raise ValueError("events cannot carry the 'off' level")
        object.__setattr__(self, "data", tuple(self.data))
        object.__setattr__(self, "context", MappingProxyType(dict(self.context or {})))
        object.__setattr__(self, "timestamp", _as_utc(self.timestamp))

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view used by the JSON formatter.

        Examples
        --------
        >>> event = LogEvent("db", LogLevel.WARN, "slow", data=(12,),
        ...                  timestamp=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        >>> event.to_dict()["timestamp"], event.to_dict()["data"]
        ('2025-01-02T03:04:05+00:00', [12])
        """

        return {
            "timestamp": self.timestamp.isoformat(),
            "logger": self.logger,
            "level": self.level.value,
            "message": self.message,
            "data": list(self.data),
            "context": dict(self.context),
        }


__all__ = ["LogEvent"]
