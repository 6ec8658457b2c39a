"""Pagehydra error hierarchy.

All pagehydra-specific errors inherit from HydraError for easy catching.
"""

from __future__ import annotations

from pathlib import Path


class HydraError(Exception):
    """Base error for all pagehydra operations."""


class ConfigError(HydraError):
    """Invalid or missing configuration."""


class ScanError(HydraError):
    """The source directory could not be enumerated."""


class BuildError(HydraError):
    """The bundler failed to produce a bundle for one source file.

    Attributes:
        source: Source file that failed to build (None if unknown).
        stderr: Raw diagnostic output from the bundler.

    """

    def __init__(self, message: str, *, source: Path | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.source = source
        self.stderr = stderr


class ComponentNotFoundError(HydraError, LookupError):
    """A component name has no entry in the metadata registry."""

    def __init__(self, component_name: str) -> None:
        super().__init__(
            f"No metadata for component {component_name!r}. "
            "Make sure the build has completed."
        )
        self.component_name = component_name
