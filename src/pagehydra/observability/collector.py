"""Build collector — records orchestrator activity into an EventLog.

Every component that can report takes an optional collector; passing
None disables recording without changing behaviour.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from pagehydra.observability.events import (
    BundleBuilt,
    BundleFailed,
    BundleRemoved,
    RegistryWritten,
    WatchEventHandled,
    now_ns,
)
from pagehydra.observability.log import EventLog


class BuildCollector:
    """Event collector for builds, registry writes and watch dispatch.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_build(
        self,
        source: str,
        outfile: str,
        component_name: str,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a successful bundle build."""
        self._log.append(
            BundleBuilt(
                source=source,
                outfile=outfile,
                component_name=component_name,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_build_failure(self, source: str, error: str) -> None:
        """Record a bundler failure."""
        self._log.append(BundleFailed(source=source, error=error, timestamp_ns=now_ns()))

    def record_removal(self, path: str, *, directory: bool = False) -> None:
        """Record deletion of a bundle file or directory."""
        self._log.append(
            BundleRemoved(
                path=path,
                kind="directory" if directory else "file",
                timestamp_ns=now_ns(),
            )
        )

    def record_registry_write(
        self,
        path: str,
        *,
        reason: str,
        entries: int,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a registry snapshot write."""
        self._log.append(
            RegistryWritten(
                path=path,
                reason=reason,  # type: ignore[arg-type]
                entries=entries,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_watch_event(
        self,
        file_name: str,
        event_type: str,
        action: str,
        *,
        dropped: bool = False,
    ) -> None:
        """Record how a raw watch event was dispatched."""
        self._log.append(
            WatchEventHandled(
                file_name=file_name,
                event_type=event_type,  # type: ignore[arg-type]
                action=action,  # type: ignore[arg-type]
                dropped=dropped,
                timestamp_ns=now_ns(),
            )
        )
