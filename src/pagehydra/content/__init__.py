"""Content layer — page sources and their identity.

Handles source discovery, name derivation and raw filesystem
notifications for the watch orchestrator.
"""

from pagehydra.content.naming import (
    SourceUnit,
    extract_component_name,
    guess_script_file_name,
    resolve_source_unit,
    to_script_file_name,
    to_script_path,
)
from pagehydra.content.scanner import ascan, scan
from pagehydra.content.watcher import RawEvent, SourceWatcher

__all__ = [
    "RawEvent",
    "SourceUnit",
    "SourceWatcher",
    "ascan",
    "extract_component_name",
    "guess_script_file_name",
    "resolve_source_unit",
    "scan",
    "to_script_file_name",
    "to_script_path",
]
