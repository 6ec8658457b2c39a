"""File watcher — raw change notifications for the build target directory.

Wraps ``watchfiles.awatch`` and reduces each filesystem change to the pair
the watch orchestrator classifies: an event type and a file name relative
to the watched directory.

- ``Change.modified`` -> ``"change"`` (content changed)
- ``Change.added`` / ``Change.deleted`` -> ``"rename"`` (entry appeared or vanished)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from pagehydra._types import WatchEventType


@dataclass(frozen=True, slots=True)
class RawEvent:
    """A filesystem notification as delivered by the watch subscription.

    Attributes:
        event_type: ``"change"`` for content edits, ``"rename"`` for
            creation or deletion.
        file_name: Path relative to the watched directory (posix), or None
            when the change could not be attributed to an entry inside it.

    """

    event_type: WatchEventType
    file_name: str | None


# Mapping from watchfiles Change enum to raw event types.
_EVENT_TYPE_MAP: dict[Change, WatchEventType] = {
    Change.added: "rename",
    Change.modified: "change",
    Change.deleted: "rename",
}


def to_raw_event(change: Change, path: str | Path, watched: Path) -> RawEvent:
    """Convert one watchfiles change into a RawEvent relative to *watched*."""
    event_type = _EVENT_TYPE_MAP.get(change, "change")
    try:
        rel = Path(path).relative_to(watched)
    except ValueError:
        return RawEvent(event_type=event_type, file_name=None)
    if not rel.parts:
        return RawEvent(event_type=event_type, file_name=None)
    return RawEvent(event_type=event_type, file_name=rel.as_posix())


class SourceWatcher:
    """Watches the build target directory and yields RawEvent objects.

    The subscription lives until :meth:`stop` is called or the consuming
    task is cancelled.

    Args:
        directory: Directory to watch recursively.
        debounce_ms: watchfiles debounce window.

    """

    def __init__(self, directory: Path, *, debounce_ms: int = 50) -> None:
        self._directory = directory.resolve()
        self._debounce_ms = debounce_ms
        self._stop_event = asyncio.Event()

    @property
    def directory(self) -> Path:
        """Absolute path of the watched directory."""
        return self._directory

    def stop(self) -> None:
        """Signal the subscription to end after the current batch."""
        self._stop_event.set()

    async def events(self) -> AsyncIterator[RawEvent]:
        """Async iterator over raw events, one per changed path."""
        from watchfiles import awatch

        async for raw_changes in awatch(
            self._directory,
            stop_event=self._stop_event,
            debounce=self._debounce_ms,
            step=50,
        ):
            for change_type, path_str in raw_changes:
                yield to_raw_event(change_type, path_str, self._directory)
