"""Build invoker — one page source in, one browser bundle out.

The page file is never handed to the bundler directly.  Instead a small
hydration entry program is synthesized that imports the page's default
export and hydrates it with the server-provided props.  The entry program
is passed as in-memory stdin content, so the source tree is never written
to.
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pagehydra._errors import BuildError
from pagehydra.content.naming import resolve_source_unit, to_import_path

if TYPE_CHECKING:
    from pagehydra.config import HydraConfig
    from pagehydra.content.naming import SourceUnit
    from pagehydra.observability.collector import BuildCollector


HYDRATION_TEMPLATE = """
import React from "react";
import { hydrateRoot } from "react-dom/client";
import Page from "%s";

hydrateRoot(
    document.getElementById("app"),
    <Page {...window.__SERVER_DATA__} />,
);
"""


def render_entry(import_path: str) -> str:
    """Return the hydration entry program for a page import path."""
    return HYDRATION_TEMPLATE % import_path


class Bundler(Protocol):
    """Anything that can turn an entry program into a browser bundle."""

    async def build(self, entry_content: str, resolve_dir: Path, outfile: Path) -> None:
        """Bundle *entry_content* into *outfile*; raise BuildError on failure."""
        ...


class EsbuildBundler:
    """Bundler backed by the ``esbuild`` executable.

    Runs one esbuild process per build with the entry program on stdin,
    bundling enabled and a browser platform target.  Imports in the entry
    program resolve relative to the process working directory.

    Args:
        executable: esbuild command name or path.

    """

    def __init__(self, executable: str = "esbuild") -> None:
        self._executable = executable

    def command(self, outfile: Path) -> list[str]:
        """Argument vector for one build."""
        return [
            self._executable,
            "--bundle",
            "--platform=browser",
            "--loader=tsx",
            f"--outfile={outfile}",
            "--log-level=warning",
        ]

    async def build(self, entry_content: str, resolve_dir: Path, outfile: Path) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command(outfile),
                cwd=resolve_dir,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            msg = f"Cannot run {self._executable!r}: {exc}"
            raise BuildError(msg) from exc

        _stdout, stderr = await proc.communicate(entry_content.encode("utf-8"))
        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            msg = f"esbuild exited with status {proc.returncode}"
            if detail:
                msg = f"{msg}: {detail}"
            raise BuildError(msg, stderr=detail)


class BuildInvoker:
    """Builds one page source into its bundle.

    Derives the source's identity, synthesizes the hydration entry and
    calls the bundler.  Bundler failures propagate unchanged except that
    the failing source is attached to the ``BuildError``.

    Args:
        config: Frozen build configuration.
        bundler: Bundler implementation (defaults to esbuild).
        collector: Optional observability collector.

    """

    def __init__(
        self,
        config: HydraConfig,
        bundler: Bundler | None = None,
        collector: BuildCollector | None = None,
    ) -> None:
        self._config = config
        self._bundler = bundler if bundler is not None else EsbuildBundler(config.esbuild)
        self._collector = collector

    async def build(self, source: Path) -> SourceUnit:
        """Bundle *source* and return its identity.

        Raises:
            BuildError: If the bundler fails.

        """
        unit = resolve_source_unit(source, self._config)
        root = self._config.root
        entry = render_entry(to_import_path(unit.path, root))

        t0 = time.perf_counter()
        try:
            await self._bundler.build(entry, root, unit.outfile(root))
        except BuildError as exc:
            if exc.source is None:
                exc.source = unit.path
            if self._collector is not None:
                self._collector.record_build_failure(unit.original_path, str(exc))
            raise
        duration_ms = (time.perf_counter() - t0) * 1000

        if self._collector is not None:
            self._collector.record_build(
                unit.original_path,
                unit.output_path,
                unit.component_name,
                duration_ms=duration_ms,
            )
        print(f"  Built: {unit.original_path} -> {unit.output_path}", file=sys.stderr)
        return unit
