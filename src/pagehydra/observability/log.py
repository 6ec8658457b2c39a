"""Event log — queryable, thread-safe event store.

Stores a bounded ring buffer of ``HydraEvent`` objects for inspection.
Supports querying by event type, time range, and file.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Registry writes run
    in worker threads, so events may arrive from outside the event loop.

"""

import threading
from collections import deque
from typing import Any

from pagehydra.observability.events import HydraEvent

# Attributes that identify the file an event is about, in lookup order.
_FILE_ATTRS = ("source", "file_name", "path", "outfile")


def _event_file(event: HydraEvent) -> str:
    for attr in _FILE_ATTRS:
        value = getattr(event, attr, None)
        if value:
            return value
    return ""


class EventLog:
    """Bounded event store with query support.

    When the buffer is full, the oldest events are discarded.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[HydraEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: HydraEvent) -> None:
        """Record an event in the log."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        file: str | None = None,
        limit: int = 100,
    ) -> list[HydraEvent]:
        """Query events with optional filters.

        Args:
            event_type: Only return events of this type.
            since_ns: Only return events after this timestamp (nanoseconds).
            file: Only return events whose file contains this substring.
            limit: Maximum number of events to return.

        Returns:
            List of matching events, most recent first.

        """
        with self._lock:
            snapshot = list(self._events)

        results: list[HydraEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if since_ns and event.timestamp_ns < since_ns:
                continue
            if file is not None and file not in _event_file(event):
                continue
            results.append(event)
        return results

    def recent(self, n: int = 20) -> list[HydraEvent]:
        """Return the N most recent events, oldest first."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return per-type counts of stored events."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": type_counts,
        }
