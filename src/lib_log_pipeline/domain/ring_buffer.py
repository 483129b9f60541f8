"""Bounded holding area for events logged before the pipeline is initialised.

Events wait here in arrival order. Once the capacity is reached every new
event pushes out the oldest one and the eviction is counted so the pipeline
can report it.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable

from .events import LogEvent


class RingBuffer:
    """Oldest-first queue of :class:`LogEvent` objects with a fixed capacity.

    Examples
    --------
    >>> from lib_log_pipeline.domain.levels import LogLevel
    >>> pending = RingBuffer(capacity=2)
    >>> [pending.push(LogEvent("app", LogLevel.INFO, text)) for text in ("one", "two", "three")]
    [False, False, True]
    >>> [event.message for event in pending.drain()]
    ['two', 'three']
    >>> pending.dropped, len(pending)
    (1, 0)
    """

    def __init__(self, *, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"buffer capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._events: Deque[LogEvent] = deque(maxlen=capacity)
        self._dropped = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def dropped(self) -> int:
        """Events evicted so far to make room for newer ones."""

        return self._dropped

    def push(self, event: LogEvent) -> bool:
        """Queue ``event``; return ``True`` when an older event was evicted."""

        evicted = len(self._events) == self._capacity
        if evicted:
            self._dropped += 1
        self._events.append(event)
        return evicted

    def push_all(self, events: Iterable[LogEvent]) -> None:
        for event in events:
            self.push(event)

    def drain(self) -> list[LogEvent]:
        """Hand back every queued event, oldest first, leaving the buffer empty."""

        pending = list(self._events)
        self._events.clear()
        return pending

    def peek(self) -> tuple[LogEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)


__all__ = ["RingBuffer"]
