"""Event model for build and watch observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias


# ---------------------------------------------------------------------------
# Bundle events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BundleBuilt:
    """The bundler produced a bundle for one source file.

    Attributes:
        source: Source file path (root-relative).
        outfile: Bundle path (root-relative).
        component_name: Registry key of the source.
        duration_ms: Time spent in the bundler.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    outfile: str
    component_name: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BundleFailed:
    """The bundler rejected one source file.

    Attributes:
        source: Source file path.
        error: Bundler error message.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    error: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BundleRemoved:
    """A previously produced bundle (file or directory) was deleted.

    Attributes:
        path: Deleted output path.
        kind: Whether a single file or a directory tree was removed.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: Literal["file", "directory"]
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Registry events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RegistryWritten:
    """The metadata registry was persisted.

    Attributes:
        path: Registry file path.
        reason: Mutation that triggered the write.
        entries: Number of entries in the written snapshot.
        duration_ms: Time spent writing.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    reason: Literal["rebuild", "add", "remove"]
    entries: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Watch events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class WatchEventHandled:
    """A raw filesystem event was classified and dispatched.

    Attributes:
        file_name: Raw event file name (relative to the watched directory).
        event_type: Raw event type.
        action: Branch taken.
        dropped: True if a build was skipped because one was in flight.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    file_name: str
    event_type: Literal["change", "rename"]
    action: Literal["ignore", "build", "delete"]
    dropped: bool
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

HydraEvent: TypeAlias = (
    BundleBuilt
    | BundleFailed
    | BundleRemoved
    | RegistryWritten
    | WatchEventHandled
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
