"""Metadata registry — component name -> bundle metadata, mirrored to JSON.

The registry is a side index for the rendering process, not a source of
truth.  The in-memory map is mutated synchronously; every mutation then
writes a full snapshot of the map to the metadata file.  Writes are not
serialized against each other: two overlapping mutations each write their
own snapshot, and the file ends up holding whichever write finished last.

File layout (pretty-printed, no version field)::

    {
      "RegisterPage": {
        "scriptFileName": "register.page.js",
        "originalPath": "pages/user/register.page.tsx",
        "outputPath": "public/js/pages/user/register.page.js"
      }
    }
"""

from __future__ import annotations

import asyncio
import json
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from pagehydra._types import ComponentName
    from pagehydra.content.naming import SourceUnit
    from pagehydra.observability.collector import BuildCollector


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    """Bundle metadata for one component.

    Attributes:
        script_file_name: Bundle file name.
        original_path: Source path relative to the project root.
        output_path: Bundle path relative to the project root.

    """

    script_file_name: str
    original_path: str
    output_path: str

    @classmethod
    def from_unit(cls, unit: SourceUnit) -> RegistryEntry:
        return cls(
            script_file_name=unit.script_file_name,
            original_path=unit.original_path,
            output_path=unit.output_path,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RegistryEntry:
        """Build an entry from its JSON form, ignoring unknown keys.

        Missing or non-string fields become empty strings.
        """

        def _str(key: str) -> str:
            value = data.get(key)
            return value if isinstance(value, str) else ""

        return cls(
            script_file_name=_str("scriptFileName"),
            original_path=_str("originalPath"),
            output_path=_str("outputPath"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "scriptFileName": self.script_file_name,
            "originalPath": self.original_path,
            "outputPath": self.output_path,
        }


def dump_metadata(entries: Mapping[ComponentName, RegistryEntry]) -> str:
    """Serialize a registry map to its on-disk JSON form."""
    payload = {name: entry.to_dict() for name, entry in entries.items()}
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def parse_metadata(text: str) -> dict[ComponentName, RegistryEntry]:
    """Parse the on-disk JSON form.

    Raises:
        ValueError: If *text* is not JSON or not a JSON object.

    """
    data = json.loads(text)
    if not isinstance(data, dict):
        msg = f"expected a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    return {
        str(name): RegistryEntry.from_dict(value)
        for name, value in data.items()
        if isinstance(value, dict)
    }


def load_metadata(path: Path) -> dict[ComponentName, RegistryEntry]:
    """Read the registry file, degrading to an empty map on any failure.

    A missing, unreadable or corrupt file is reported on stderr and treated
    as "nothing registered"; rendering must never fail because of it.
    """
    try:
        return parse_metadata(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        print(f"  Warning: cannot load metadata {path}: {exc}", file=sys.stderr)
        return {}


def write_metadata(path: Path, content: str) -> None:
    """Overwrite the registry file, creating its directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class MetadataRegistry:
    """In-memory registry with write-through persistence.

    Owned by one orchestrator; not shared across processes.

    Args:
        path: Registry file.
        entries: Initial contents (not persisted until the first mutation).
        collector: Optional observability collector.

    """

    def __init__(
        self,
        path: Path,
        entries: Mapping[ComponentName, RegistryEntry] | None = None,
        collector: BuildCollector | None = None,
    ) -> None:
        self._path = path
        self._entries: dict[ComponentName, RegistryEntry] = dict(entries or {})
        self._collector = collector

    @classmethod
    def load(cls, path: Path, collector: BuildCollector | None = None) -> MetadataRegistry:
        """Registry pre-populated from *path* (empty if unreadable)."""
        return cls(path, load_metadata(path), collector)

    @property
    def path(self) -> Path:
        """Registry file path."""
        return self._path

    def get(self, name: ComponentName) -> RegistryEntry | None:
        return self._entries.get(name)

    def snapshot(self) -> dict[ComponentName, RegistryEntry]:
        """Copy of the current map."""
        return dict(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ComponentName]:
        return iter(self.snapshot())

    async def rebuild_full(self, entries: Mapping[ComponentName, RegistryEntry]) -> None:
        """Replace the whole map and persist it."""
        self._entries = dict(entries)
        await self._persist("rebuild")

    async def add(self, name: ComponentName, entry: RegistryEntry) -> None:
        """Insert or overwrite *name* (last write wins) and persist."""
        self._entries[name] = entry
        await self._persist("add")

    async def remove(self, name: ComponentName) -> bool:
        """Delete *name* and persist. Returns False (no write) if absent."""
        if self._entries.pop(name, None) is None:
            return False
        await self._persist("remove")
        return True

    async def _persist(self, reason: str) -> None:
        # Snapshot is taken before the first suspension point; the write
        # itself runs in a worker thread and may overlap other writes.
        content = dump_metadata(self._entries)
        count = len(self._entries)
        t0 = time.perf_counter()
        await asyncio.to_thread(write_metadata, self._path, content)
        if self._collector is not None:
            self._collector.record_registry_write(
                str(self._path),
                reason=reason,
                entries=count,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
