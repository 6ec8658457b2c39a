"""Full build pass — scan, bundle everything, write the registry once.

Used on its own for one-shot builds and as the first step of a watch
build.  Sources are bundled concurrently; one failing source never stops
the others.  Registry entries are assigned in sorted source order, so when
two sources share a component name the later path wins.
"""

from __future__ import annotations

import asyncio
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pagehydra._errors import BuildError
from pagehydra.content.scanner import ascan
from pagehydra.registry.metadata import RegistryEntry

if TYPE_CHECKING:
    from pagehydra.bundler.invoker import BuildInvoker
    from pagehydra.config import HydraConfig
    from pagehydra.content.naming import SourceUnit
    from pagehydra.registry.metadata import MetadataRegistry


@dataclass(frozen=True, slots=True)
class BuildFailure:
    """A source the bundler rejected.

    Attributes:
        source: Absolute path to the source file.
        message: Bundler error message.

    """

    source: Path
    message: str


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Aggregate result of a full build pass.

    Attributes:
        built: Sources that bundled successfully, in sorted path order.
        failures: Sources that failed.
        registered: Number of registry entries written (less than
            ``len(built)`` when component names collide).
        duration_ms: Wall-clock time for the pass.
        metadata_path: Registry file that was written.

    """

    built: tuple[SourceUnit, ...]
    failures: tuple[BuildFailure, ...]
    registered: int
    duration_ms: float
    metadata_path: Path

    @property
    def ok(self) -> bool:
        return not self.failures


async def build_sources(
    config: HydraConfig,
    invoker: BuildInvoker,
    registry: MetadataRegistry,
) -> BuildResult:
    """Bundle every source under the target directory and rebuild the registry.

    Raises:
        ScanError: If the target directory cannot be scanned. Nothing is
            built and the registry is left untouched.

    """
    t0 = time.perf_counter()
    sources = sorted(await ascan(config.target_path, config.suffix))

    outcomes = await asyncio.gather(
        *(invoker.build(source) for source in sources),
        return_exceptions=True,
    )

    built: list[SourceUnit] = []
    failures: list[BuildFailure] = []
    for source, outcome in zip(sources, outcomes, strict=True):
        if isinstance(outcome, BuildError):
            print(f"  Build error ({source.name}): {outcome}", file=sys.stderr)
            failures.append(BuildFailure(source=source, message=str(outcome)))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            built.append(outcome)

    entries = {unit.component_name: RegistryEntry.from_unit(unit) for unit in built}
    await registry.rebuild_full(entries)

    return BuildResult(
        built=tuple(built),
        failures=tuple(failures),
        registered=len(entries),
        duration_ms=(time.perf_counter() - t0) * 1000,
        metadata_path=registry.path,
    )
