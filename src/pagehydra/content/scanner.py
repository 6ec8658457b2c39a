"""Directory scanner — enumerate build-target source files.

Walks a directory tree and collects every regular file whose name ends
with the configured suffix.  Symlinked directories are not followed, so a
link cycle cannot make the scan loop forever.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import TYPE_CHECKING

from pagehydra._errors import ScanError

if TYPE_CHECKING:
    from collections.abc import Iterator


def scan(root_dir: str | Path, suffix: str) -> set[Path]:
    """Return absolute paths of all files under *root_dir* ending in *suffix*.

    Paths keep *root_dir* as given; symlinks in it are not resolved.
    Order is unspecified; callers get a set.

    Raises:
        ScanError: If *root_dir* (or a directory beneath it) does not exist
            or cannot be read.

    """
    root = Path(root_dir).absolute()
    try:
        return set(_walk(root, suffix))
    except OSError as exc:
        msg = f"Cannot scan {root}: {exc}"
        raise ScanError(msg) from exc


async def ascan(root_dir: str | Path, suffix: str) -> set[Path]:
    """Run :func:`scan` off the event loop."""
    return await asyncio.to_thread(scan, root_dir, suffix)


def _walk(directory: Path, suffix: str) -> Iterator[Path]:
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk(Path(entry.path), suffix)
            elif entry.is_file() and entry.name.endswith(suffix):
                yield Path(entry.path)
