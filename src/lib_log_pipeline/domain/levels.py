"""Severity scale shared by loggers, appenders, and formatters.

Purpose
-------
Offer a domain-specific representation of log severities with a total order
used for gating emissions, plus presentation helpers for formatters.

Contents
--------
* :class:`LogLevel` enum with rank-based comparisons and conversion helpers.
* ``_RANK_TABLE`` constant mapping levels to their verbosity rank.

System Role
-----------
Loggers compare event ranks against their cached threshold rank; appenders
declare the set of levels they accept; the template engine renders
:attr:`LogLevel.label` for the ``{LEVEL}`` token.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class LogLevel(str, Enum):
    """Enumerated severities ordered from ``off`` (silent) to ``trace``.

    ``track`` sits between ``debug`` and ``trace`` so analytics-style events
    can be enabled without full trace verbosity.

    Examples
    --------
    >>> LogLevel.ERROR.is_at_least(LogLevel.INFO)
    True
    >>> LogLevel.INFO.allows(LogLevel.DEBUG)
    False
    >>> LogLevel.OFF.allows(LogLevel.FATAL)
    False
    """

    OFF = "off"
    FATAL = "fatal"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACK = "track"
    TRACE = "trace"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Return the verbosity index (``off`` = 0, ``trace`` = 7)."""

        return _RANK_TABLE[self]

    @property
    def label(self) -> str:
        """Return the uppercase name padded to the longest level name."""

        return self.value.upper().ljust(_LABEL_WIDTH)

    def is_at_least(self, other: "LogLevel") -> bool:
        """Return ``True`` when ``self`` is at least as severe as ``other``."""

        return self.rank <= other.rank

    def allows(self, event_level: "LogLevel") -> bool:
        """Return ``True`` when a threshold of ``self`` emits ``event_level``."""

        if self is LogLevel.OFF or event_level is LogLevel.OFF:
            return False
        return event_level.rank <= self.rank

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_rank(cls, rank: int) -> "LogLevel":
        """Return the level stored at ``rank`` in the ordered scale."""
        try:
            return _LEVELS_BY_RANK[rank]
        except (IndexError, TypeError) as exc:
            raise ValueError(f"Unsupported log level rank: {rank!r}") from exc

    @classmethod
    def coerce(cls, value: Any, default: "LogLevel | None" = None) -> "LogLevel | None":
        """Resolve ``value`` to a level, returning ``default`` when it cannot.

        Examples
        --------
        >>> LogLevel.coerce("DEBUG")
        <LogLevel.DEBUG: 'debug'>
        >>> LogLevel.coerce("verbose", LogLevel.INFO)
        <LogLevel.INFO: 'info'>
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            try:
                return cls.from_name(value)
            except ValueError:
                return default
        return default


_LEVELS_BY_RANK: tuple[LogLevel, ...] = tuple(LogLevel)
_RANK_TABLE = {level: index for index, level in enumerate(_LEVELS_BY_RANK)}
# Rank lookup used on the hot path of every log call.

_LABEL_WIDTH = max(len(level.value) for level in LogLevel if level is not LogLevel.OFF)

EMITTING_LEVELS: frozenset[LogLevel] = frozenset(level for level in LogLevel if level is not LogLevel.OFF)
"""Every level an event can carry; appenders accept this set by default."""


__all__ = ["EMITTING_LEVELS", "LogLevel"]
