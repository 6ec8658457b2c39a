"""Per-file build locks — single-flight guard for the watch loop.

Keys are raw event file names, not component names.  A key exists only
while a build for that file name is in flight; absence means unlocked.

All methods must be called from the event loop thread.  Acquire and
release contain no suspension points, so they are atomic with respect to
other tasks on the loop.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class BuildLocks:
    """Set of file names with a build in flight."""

    __slots__ = ("_held",)

    def __init__(self) -> None:
        self._held: dict[str, asyncio.Event] = {}

    def is_locked(self, file_name: str) -> bool:
        return file_name in self._held

    def try_acquire(self, file_name: str) -> bool:
        """Take the lock for *file_name*. Returns False if already held."""
        if file_name in self._held:
            return False
        self._held[file_name] = asyncio.Event()
        return True

    def release(self, file_name: str) -> None:
        """Release the lock and wake anything waiting on it."""
        released = self._held.pop(file_name, None)
        if released is not None:
            released.set()

    async def wait_released(self, file_name: str) -> None:
        """Suspend until the current holder of *file_name* releases it.

        Returns immediately if the lock is not held.
        """
        held = self._held.get(file_name)
        if held is not None:
            await held.wait()

    @contextmanager
    def hold(self, file_name: str) -> Iterator[bool]:
        """Try to take the lock for the duration of the block.

        Yields whether the lock was acquired.  An acquired lock is released
        on every exit path, including exceptions.
        """
        acquired = self.try_acquire(file_name)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(file_name)

    def __contains__(self, file_name: object) -> bool:
        return file_name in self._held

    def __len__(self) -> int:
        return len(self._held)
