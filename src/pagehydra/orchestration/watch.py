"""Watch orchestrator — turns raw filesystem events into builds and cleanup.

Per raw event ``(event_type, file_name)``:

1. Classify by stat-ing the path under the target directory:

   ======================  ==========================================
   stat result             action
   ======================  ==========================================
   missing                 delete
   directory               ignore
   file, wrong suffix      ignore
   file, ``rename`` event  ignore (a ``change`` event follows)
   file, ``change`` event  build
   ======================  ==========================================

2. delete: drop the component from the registry (suffix matches only) and
   remove the bundle file or directory.  If a build for the same file name
   is in flight, wait for it to release its lock first.
3. build: take the per-file lock (drop the event if it is held), bundle,
   and register the component if it is not registered yet.  An existing
   entry is never updated.

Each event runs as its own task.  Events for different files interleave
freely; registry writes are not ordered between them.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import stat
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pagehydra._errors import BuildError
from pagehydra.content.naming import extract_component_name, to_script_path
from pagehydra.registry.metadata import RegistryEntry

if TYPE_CHECKING:
    from collections.abc import AsyncIterable

    from pagehydra._types import EventAction, WatchEventType
    from pagehydra.bundler.invoker import BuildInvoker
    from pagehydra.config import HydraConfig
    from pagehydra.content.watcher import RawEvent
    from pagehydra.observability.collector import BuildCollector
    from pagehydra.orchestration.locks import BuildLocks
    from pagehydra.registry.metadata import MetadataRegistry


def classify_event(
    event_type: WatchEventType,
    file_name: str,
    stat_result: os.stat_result | None,
    suffix: str,
) -> EventAction:
    """Decide which branch a raw event takes. See the module table."""
    if stat_result is None:
        return "delete"
    if stat.S_ISDIR(stat_result.st_mode):
        return "ignore"
    if not file_name.endswith(suffix):
        return "ignore"
    if event_type == "rename":
        return "ignore"
    return "build"


def _stat(path: Path) -> os.stat_result | None:
    try:
        return path.stat()
    except OSError:
        return None


def _remove_output(path: Path) -> Literal["file", "directory"] | None:
    """Delete a bundle file or directory tree. None if nothing was there."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
            return "directory"
        path.unlink()
        return "file"
    except FileNotFoundError:
        return None


class WatchOrchestrator:
    """Dispatches raw watch events against an owned registry and lock set.

    Args:
        config: Frozen build configuration.
        registry: Registry to keep in sync with the source tree.
        locks: Per-file lock set.
        invoker: Build invoker used for the build branch.
        collector: Optional observability collector.

    """

    def __init__(
        self,
        config: HydraConfig,
        registry: MetadataRegistry,
        locks: BuildLocks,
        invoker: BuildInvoker,
        collector: BuildCollector | None = None,
    ) -> None:
        self._config = config
        self._registry = registry
        self._locks = locks
        self._invoker = invoker
        self._collector = collector
        self._tasks: set[asyncio.Task[EventAction]] = set()

    @property
    def registry(self) -> MetadataRegistry:
        return self._registry

    @property
    def locks(self) -> BuildLocks:
        return self._locks

    @property
    def pending(self) -> int:
        """Number of events still being handled."""
        return len(self._tasks)

    async def run(self, events: AsyncIterable[RawEvent]) -> None:
        """Dispatch every event from *events* until the subscription ends."""
        try:
            async for event in events:
                self.dispatch(event)
        finally:
            await self.drain()

    def dispatch(self, event: RawEvent) -> asyncio.Task[EventAction] | None:
        """Start handling *event* in its own task. Events without a file name are ignored."""
        if event.file_name is None:
            return None
        task = asyncio.create_task(self.handle_event(event.event_type, event.file_name))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for all in-flight events, including ones they spawn meanwhile."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def handle_event(self, event_type: WatchEventType, file_name: str) -> EventAction:
        """Classify and handle one raw event.

        Never raises: failures are reported and the event is abandoned.
        Returns the branch taken.
        """
        try:
            return await self._handle(event_type, file_name)
        except Exception as exc:
            print(f"  Watch error ({file_name}): {exc}", file=sys.stderr)
            return "ignore"

    async def _handle(self, event_type: WatchEventType, file_name: str) -> EventAction:
        path = self._config.target_path / file_name
        stat_result = await asyncio.to_thread(_stat, path)
        action = classify_event(event_type, file_name, stat_result, self._config.suffix)

        dropped = False
        if action == "delete":
            await self._delete(file_name, path)
        elif action == "build":
            dropped = not await self._build(file_name, path)

        if self._collector is not None:
            self._collector.record_watch_event(file_name, event_type, action, dropped=dropped)
        return action

    async def _build(self, file_name: str, path: Path) -> bool:
        """Build branch. Returns False if the event was dropped."""
        with self._locks.hold(file_name) as acquired:
            if not acquired:
                return False
            try:
                unit = await self._invoker.build(path)
            except BuildError as exc:
                print(f"  Build error ({file_name}): {exc}", file=sys.stderr)
                return True
            if unit.component_name not in self._registry:
                await self._registry.add(unit.component_name, RegistryEntry.from_unit(unit))
        return True

    async def _delete(self, file_name: str, path: Path) -> None:
        """Deletion branch."""
        if self._locks.is_locked(file_name):
            await self._locks.wait_released(file_name)
            if await asyncio.to_thread(_stat, path) is not None:
                return

        config = self._config
        relative = path.relative_to(config.root)
        if file_name.endswith(config.suffix):
            name = extract_component_name(file_name, config.suffix)
            if name in self._registry:
                await self._registry.remove(name)
            output = config.root / to_script_path(config.output_dir, relative, config.suffix)
        else:
            output = config.output_path / relative

        try:
            removed = await asyncio.to_thread(_remove_output, output)
        except OSError as exc:
            print(f"  Delete error ({output}): {exc}", file=sys.stderr)
            return
        if removed is None:
            return
        print(f"  Deleted: {output}", file=sys.stderr)
        if self._collector is not None:
            self._collector.record_removal(str(output), directory=removed == "directory")
