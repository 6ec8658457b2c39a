"""Pagehydra entry points — one-shot build, watch build, runtime resolve.

``build_all`` and ``watch_build`` are synchronous wrappers that load the
configuration and own the event loop.  ``abuild_all`` and ``awatch_build``
are the same operations for callers that already run a loop.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pagehydra._errors import BuildError
from pagehydra.config_loader import load_config

if TYPE_CHECKING:
    from collections.abc import AsyncIterable

    from pagehydra.bundler.invoker import Bundler
    from pagehydra.config import HydraConfig
    from pagehydra.content.watcher import RawEvent
    from pagehydra.observability.collector import BuildCollector
    from pagehydra.orchestration.build import BuildResult


async def abuild_all(
    config: HydraConfig,
    *,
    bundler: Bundler | None = None,
    collector: BuildCollector | None = None,
) -> BuildResult:
    """Scan, bundle every source and write the registry from scratch."""
    from pagehydra.bundler.invoker import BuildInvoker
    from pagehydra.orchestration.build import build_sources
    from pagehydra.registry.metadata import MetadataRegistry

    invoker = BuildInvoker(config, bundler, collector)
    registry = MetadataRegistry(config.metadata_path, collector=collector)
    return await build_sources(config, invoker, registry)


async def awatch_build(
    config: HydraConfig,
    *,
    bundler: Bundler | None = None,
    collector: BuildCollector | None = None,
    events: AsyncIterable[RawEvent] | None = None,
) -> None:
    """Run a full build pass, then keep bundles and registry in sync.

    Runs until *events* is exhausted (the filesystem watcher by default,
    which only ends when its task is cancelled).  Build failures in the
    initial pass are reported and do not stop the watch; an unreadable
    target directory does.
    """
    from pagehydra.banner import print_banner
    from pagehydra.bundler.invoker import BuildInvoker
    from pagehydra.content.watcher import SourceWatcher
    from pagehydra.orchestration.build import build_sources
    from pagehydra.orchestration.locks import BuildLocks
    from pagehydra.orchestration.watch import WatchOrchestrator
    from pagehydra.registry.metadata import MetadataRegistry

    invoker = BuildInvoker(config, bundler, collector)
    registry = MetadataRegistry(config.metadata_path, collector=collector)
    result = await build_sources(config, invoker, registry)

    print_banner(
        config,
        len(result.built),
        mode="watch",
        load_ms=result.duration_ms,
        warnings=[f"{f.source.name}: build failed" for f in result.failures],
    )

    orchestrator = WatchOrchestrator(config, registry, BuildLocks(), invoker, collector)
    if events is None:
        events = SourceWatcher(config.target_path, debounce_ms=config.debounce_ms).events()
    await orchestrator.run(events)


def build_all(
    root: str | Path = ".",
    *,
    bundler: Bundler | None = None,
    collector: BuildCollector | None = None,
    **kwargs: object,
) -> BuildResult:
    """Build every page once and write the registry.

    Args:
        root: Project root directory.
        bundler: Bundler override (esbuild by default).
        collector: Optional observability collector.
        **kwargs: Override HydraConfig fields.

    Raises:
        ScanError: If the target directory cannot be scanned.
        BuildError: If any page failed to build. The registry has already
            been written with the pages that did build.

    """
    from pagehydra.banner import print_banner

    config = load_config(Path(root), **kwargs)
    result = asyncio.run(abuild_all(config, bundler=bundler, collector=collector))

    print_banner(
        config,
        len(result.built),
        mode="build",
        load_ms=result.duration_ms,
    )
    _print_build_summary(result)

    if not result.ok:
        names = ", ".join(f.source.name for f in result.failures)
        msg = f"{len(result.failures)} page(s) failed to build: {names}"
        raise BuildError(msg, source=result.failures[0].source)
    return result


def _print_build_summary(result: BuildResult) -> None:
    """Print build completion summary to stderr."""
    built = len(result.built)
    lines = [
        "─" * 41,
        f"  Built {built} bundle{'s' if built != 1 else ''}",
        f"  Registered {result.registered} component{'s' if result.registered != 1 else ''}",
    ]
    if result.failures:
        lines.append(f"  Failed: {len(result.failures)}")
    lines.append(f"  Metadata: {result.metadata_path}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)


def watch_build(
    root: str | Path = ".",
    *,
    bundler: Bundler | None = None,
    collector: BuildCollector | None = None,
    **kwargs: object,
) -> None:
    """Build every page, then rebuild pages as they change until interrupted.

    Args:
        root: Project root directory.
        bundler: Bundler override (esbuild by default).
        collector: Optional observability collector.
        **kwargs: Override HydraConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    try:
        asyncio.run(awatch_build(config, bundler=bundler, collector=collector))
    except KeyboardInterrupt:
        print("\n  Stopped.", file=sys.stderr)


def resolve(component_name: str, metadata_path: str | Path, *, strict: bool = True) -> str:
    """Bundle file name for *component_name* according to the registry file.

    Raises:
        ComponentNotFoundError: In strict mode, if the component is not registered.

    """
    from pagehydra.registry.resolver import ComponentResolver

    return ComponentResolver(metadata_path, strict=strict).resolve(component_name)
