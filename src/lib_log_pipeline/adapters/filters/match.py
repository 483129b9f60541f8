"""Rule-map filter registered as ``match``.

Purpose
-------
Decide eligibility of an event for one appender from two maps of
``path -> expected value``: every ``allow`` rule must hold and no ``deny``
rule may hold.

Contents
--------
* :class:`MatchFilter` - the ``match`` filter plugin.

System Role
-----------
Consulted by the dispatch use case before the owning appender writes.
Evaluation errors reject the event rather than propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from lib_log_pipeline.domain.config import FilterConfig, PluginKind
from lib_log_pipeline.domain.events import LogEvent
from lib_log_pipeline.domain.paths import deep_equal, resolve_path

logger = logging.getLogger(__name__)


def _rules(value: Any) -> tuple[tuple[str, Any], ...]:
    if not value:
        return ()
    if not isinstance(value, Mapping):
        raise ValueError(f"match filter rules must be a mapping, got {type(value).__name__}")
    return tuple((str(path), expected) for path, expected in value.items())


class MatchFilter:
    """Allow/deny filter comparing event fields with :func:`deep_equal`.

    Examples
    --------
    >>> from lib_log_pipeline.domain.levels import LogLevel
    >>> match = MatchFilter()
    >>> match.init(FilterConfig(name="match", options={"allow": {"logger": "app"}, "deny": {"context.user": "bot"}}))
    >>> match.allow(LogEvent("app", LogLevel.INFO, "hi", context={"user": "alice"}))
    True
    >>> match.allow(LogEvent("app", LogLevel.INFO, "hi", context={"user": "bot"}))
    False
    >>> match.allow(LogEvent("other", LogLevel.INFO, "hi"))
    False
    """

    name = "match"
    version = "1.0.0"
    kind = PluginKind.FILTER

    def __init__(self) -> None:
        self.enabled = True
        self._allow: tuple[tuple[str, Any], ...] = ()
        self._deny: tuple[tuple[str, Any], ...] = ()

    def init(self, config: FilterConfig) -> None:
        self.name = config.name
        self.enabled = config.enabled
        self._allow = _rules(config.option("allow"))
        self._deny = _rules(config.option("deny"))

    def allow(self, event: LogEvent) -> bool:
        """Return ``True`` when ``event`` satisfies every allow rule and no deny rule."""

        try:
            for path, expected in self._allow:
                if not deep_equal(resolve_path(event, path), expected):
                    return False
            for path, expected in self._deny:
                if deep_equal(resolve_path(event, path), expected):
                    return False
        except Exception:
            logger.debug("match filter %s rejected %s after an evaluation error", self.name, event.logger, exc_info=True)
            return False
        return True

    def dispose(self) -> None:
        self._allow = ()
        self._deny = ()


__all__ = ["MatchFilter"]
