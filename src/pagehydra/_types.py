"""Shared type definitions for pagehydra."""

from typing import Literal, TypeAlias

# Mode of operation
HydraMode: TypeAlias = Literal["build", "watch"]

# Registry key derived from a source file name (e.g. "UserProfilePage")
ComponentName: TypeAlias = str

# Raw filesystem notification kind ("rename" = create/delete signal)
WatchEventType: TypeAlias = Literal["change", "rename"]

# Branch taken by the watch orchestrator for one raw event
EventAction: TypeAlias = Literal["ignore", "build", "delete"]
