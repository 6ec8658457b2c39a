"""Pagehydra configuration.

HydraConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pagehydra._errors import ConfigError


@dataclass(frozen=True, slots=True)
class HydraConfig:
    """Configuration for a page bundle build.

    Attributes:
        root: Project root. Import paths handed to the bundler and the paths
              recorded in the registry are relative to it. Always resolved to
              an absolute path on construction.
        target_dir: Directory containing the page sources to build and watch.
        suffix: File name suffix that marks a build target (e.g. ``page.tsx``).
        output_dir: Directory bundles are written to. The source directory
            structure is preserved underneath it.
        metadata_file: JSON file mapping component names to bundle metadata.
        strict: Resolution mode. When True, resolving an unknown component
            raises ``ComponentNotFoundError``; when False, a naming-convention
            guess is returned instead.
        esbuild: Bundler executable.
        debounce_ms: Debounce window for the filesystem watcher.

    """

    root: Path = field(default_factory=Path.cwd)
    target_dir: str = "pages"
    suffix: str = "page.tsx"
    output_dir: str = "public/js"
    metadata_file: str = "public/js/metadata.json"
    strict: bool = True
    esbuild: str = "esbuild"
    debounce_ms: int = 50

    def __post_init__(self) -> None:
        if not self.suffix:
            msg = "suffix must not be empty"
            raise ConfigError(msg)
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def target_path(self) -> Path:
        """Absolute path to the build target directory."""
        return self._absolute(self.target_dir)

    @property
    def output_path(self) -> Path:
        """Absolute path to the bundle output directory."""
        return self._absolute(self.output_dir)

    @property
    def metadata_path(self) -> Path:
        """Absolute path to the registry file."""
        return self._absolute(self.metadata_file)

    def _absolute(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute():
            return path
        return self.root / path
