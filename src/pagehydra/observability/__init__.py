"""Build observability — structured events for builds and the watch loop.

Quick Start:
    >>> from pagehydra.observability import BuildCollector, EventLog
    >>> log = EventLog()
    >>> collector = BuildCollector(log)
    >>> # Pass collector to BuildInvoker / MetadataRegistry / WatchOrchestrator

"""

from pagehydra.observability.collector import BuildCollector
from pagehydra.observability.events import (
    BundleBuilt,
    BundleFailed,
    BundleRemoved,
    HydraEvent,
    RegistryWritten,
    WatchEventHandled,
    now_ns,
)
from pagehydra.observability.log import EventLog

__all__ = [
    "BuildCollector",
    "BundleBuilt",
    "BundleFailed",
    "BundleRemoved",
    "EventLog",
    "HydraEvent",
    "RegistryWritten",
    "WatchEventHandled",
    "now_ns",
]
