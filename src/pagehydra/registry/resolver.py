"""Component resolver — runtime lookup of a component's bundle.

Used by the rendering process, which only ever reads the registry file.
The file is re-read on every lookup so a running watch build is picked up
without restarting the renderer.

Two modes, chosen explicitly:

- strict: an unregistered component raises ``ComponentNotFoundError``
- fallback: an unregistered component resolves to the conventional
  bundle name (``UserProfilePage`` -> ``user-profile.page.js``) with a
  warning on stderr
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pagehydra._errors import ComponentNotFoundError
from pagehydra.content.naming import guess_script_file_name
from pagehydra.registry.metadata import RegistryEntry, load_metadata

if TYPE_CHECKING:
    from pagehydra._types import ComponentName


class ComponentResolver:
    """Resolves component names to bundle file names via the registry file.

    Args:
        metadata_path: Registry file written by the build.
        strict: Raise on unknown components instead of guessing.

    """

    __slots__ = ("_metadata_path", "_strict")

    def __init__(self, metadata_path: str | Path, *, strict: bool = True) -> None:
        self._metadata_path = Path(metadata_path)
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def lookup(self, component_name: ComponentName) -> RegistryEntry | None:
        """Registry entry for *component_name*, or None."""
        entry = load_metadata(self._metadata_path).get(component_name)
        if entry is None or not entry.script_file_name:
            return None
        return entry

    def resolve(self, component_name: ComponentName) -> str:
        """Bundle file name for *component_name*.

        Raises:
            ComponentNotFoundError: In strict mode, if the component is not
                registered.

        """
        entry = self.lookup(component_name)
        if entry is not None:
            return entry.script_file_name
        if self._strict:
            raise ComponentNotFoundError(component_name)
        guess = guess_script_file_name(component_name)
        print(
            f"  Warning: no metadata for {component_name!r}, falling back to {guess}",
            file=sys.stderr,
        )
        return guess
