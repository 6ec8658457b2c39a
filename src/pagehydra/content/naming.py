"""Naming resolver — stable external identity for a page source file.

Pure functions mapping a source path to the names the rest of the system
uses: the component name (registry key), the flat bundle file name and the
structure-preserving bundle output path.

Collision behaviour:
    ``extract_component_name`` and ``to_script_file_name`` look at the base
    name only, so ``user/register.page.tsx`` and ``video/register.page.tsx``
    both become ``RegisterPage`` / ``register.page.js``.  ``to_script_path``
    keeps the directory and never collides.  The registry resolves
    collisions (last write wins); these functions do not try to.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath
from typing import TYPE_CHECKING

from pagehydra._errors import ConfigError

if TYPE_CHECKING:
    from pagehydra._types import ComponentName
    from pagehydra.config import HydraConfig

_SEGMENT_SEPARATORS = re.compile(r"[.\-_]")
_WORD_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_SCRIPT_TAIL = "page.js"
_COMPONENT_TAIL = "Page"


def _strip_suffix(name: str, suffix: str) -> str:
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def extract_component_name(path: str | PurePath, suffix: str = "page.tsx") -> ComponentName:
    """Derive the PascalCase component name from a file's base name.

    ``user-profile.page.tsx`` -> ``UserProfilePage``;
    ``video.register.page.tsx`` -> ``VideoRegisterPage``.

    The directory part of *path* is ignored.
    """
    stem = _strip_suffix(PurePath(path).name, suffix)
    words = _SEGMENT_SEPARATORS.split(stem)
    pascal = "".join(word[:1].upper() + word[1:].lower() for word in words)
    return pascal + _COMPONENT_TAIL


def to_script_file_name(path: str | PurePath, suffix: str) -> str:
    """Flat bundle file name: base name with *suffix* replaced by ``page.js``."""
    return _strip_suffix(PurePath(path).name, suffix) + _SCRIPT_TAIL


def to_script_path(
    output_dir: str | PurePath,
    original_path: str | PurePath,
    suffix: str,
    *,
    root: Path | None = None,
) -> PurePosixPath:
    """Structure-preserving bundle path under *output_dir*.

    ``to_script_path("out", "a/b/file.page.tsx", "page.tsx")``
    -> ``out/a/b/file.page.js``.

    Absolute *original_path* values are made relative to *root* (the
    current directory when omitted) before the output directory is
    prefixed.
    """
    original = PurePath(original_path)
    if original.is_absolute():
        original = Path(original).relative_to(root or Path.cwd())
    relative = PurePosixPath(original.as_posix())
    file_name = _strip_suffix(relative.name, suffix) + _SCRIPT_TAIL
    return PurePosixPath(PurePath(output_dir).as_posix()) / relative.parent / file_name


def guess_script_file_name(component_name: ComponentName) -> str:
    """Conventional bundle name for a component missing from the registry.

    Inverts the component naming as far as it can:
    ``UserProfilePage`` -> ``user-profile.page.js``.
    """
    stem = component_name
    if stem.endswith(_COMPONENT_TAIL) and stem != _COMPONENT_TAIL:
        stem = stem[: -len(_COMPONENT_TAIL)]
    return _WORD_BOUNDARY.sub("-", stem).lower() + "." + _SCRIPT_TAIL


def to_import_path(source: Path, root: Path) -> str:
    """Root-relative, ``./``-prefixed posix import specifier for *source*."""
    return "./" + source.relative_to(root).as_posix()


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """Identity derived for one page source file.

    Never persisted on its own; recomputed whenever it is needed.

    Attributes:
        path: Absolute path to the source file.
        component_name: Registry key.
        script_file_name: Flat bundle file name.
        original_path: Source path relative to the project root (posix).
        output_path: Bundle path relative to the project root (posix).

    """

    path: Path
    component_name: ComponentName
    script_file_name: str
    original_path: str
    output_path: str

    def outfile(self, root: Path) -> Path:
        """Absolute bundle path."""
        return root / self.output_path


def resolve_source_unit(path: Path, config: HydraConfig) -> SourceUnit:
    """Derive the full identity of *path* under *config*.

    Raises:
        ConfigError: If *path* is not under the project root.

    """
    source = path if path.is_absolute() else config.root / path
    try:
        original = PurePosixPath(source.relative_to(config.root).as_posix())
    except ValueError as exc:
        msg = f"Source {source} is outside the project root {config.root}"
        raise ConfigError(msg) from exc
    return SourceUnit(
        path=source,
        component_name=extract_component_name(source, config.suffix),
        script_file_name=to_script_file_name(source, config.suffix),
        original_path=str(original),
        output_path=str(to_script_path(config.output_dir, original, config.suffix)),
    )
