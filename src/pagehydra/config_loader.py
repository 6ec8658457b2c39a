"""Load HydraConfig from pagehydra.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

from pathlib import Path

from pagehydra.config import HydraConfig

_CONFIG_KEYS = frozenset({
    "target_dir", "suffix", "output_dir", "metadata_file",
    "strict", "esbuild", "debounce_ms",
})


def load_config(root: Path, **overrides: object) -> HydraConfig:
    """Load HydraConfig from root, optionally merging pagehydra.yaml.

    Looks for pagehydra.yaml, pagehydra.yml, or pagehydra.toml in root. If
    found, loads and merges with overrides. Overrides that are None are
    treated as "not given" so CLI defaults never mask file values.
    """
    file_config = _read_hydra_config(root)
    given = {k: v for k, v in overrides.items() if v is not None}
    merged = {**file_config, **given}
    return HydraConfig(root=root, **merged)


def _read_hydra_config(root: Path) -> dict[str, object]:
    """Read config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("pagehydra.yaml", "pagehydra.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "pagehydra.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    import yaml

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_hydra_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_hydra_section(data)


def _flatten_hydra_section(data: dict[str, object]) -> dict[str, object]:
    """Extract pagehydra.* keys into top-level config."""
    result: dict[str, object] = {}
    section = data.get("pagehydra")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _CONFIG_KEYS:
                result[k] = v
    for k, v in data.items():
        if k != "pagehydra" and k in _CONFIG_KEYS:
            result[k] = v
    return result
