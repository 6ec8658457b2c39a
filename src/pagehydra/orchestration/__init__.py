"""Orchestration — full builds, the watch loop and per-file locking."""

from pagehydra.orchestration.build import BuildFailure, BuildResult, build_sources
from pagehydra.orchestration.locks import BuildLocks
from pagehydra.orchestration.watch import WatchOrchestrator, classify_event

__all__ = [
    "BuildFailure",
    "BuildLocks",
    "BuildResult",
    "WatchOrchestrator",
    "build_sources",
    "classify_event",
]
