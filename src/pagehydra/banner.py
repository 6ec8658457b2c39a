"""Startup banner — mode-aware status output.

Prints a short banner with timing and paths.  Detects ``NO_COLOR`` /
``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagehydra._types import HydraMode
    from pagehydra.config import HydraConfig


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "build": (_YELLOW, "build"),
    "watch": (_GREEN, "watch"),
}


def _mode_badge(mode: HydraMode) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def print_banner(
    config: HydraConfig,
    page_count: int,
    mode: HydraMode,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the startup banner to stderr.

    Args:
        config: Resolved HydraConfig.
        page_count: Number of pages that built.
        mode: ``"build"`` or ``"watch"``.
        load_ms: Time spent on the initial build in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from pagehydra import __version__

    header = f"  {_CYAN}{_BOLD}pagehydra{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}"

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    pages_label = "page" if page_count == 1 else "pages"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {page_count} {pages_label} built{timing}")
    lines.append(f"  {_DIM}├─{_RESET} source: {_DIM}{config.target_path}{_RESET} (*{config.suffix})")
    lines.append(f"  {_DIM}├─{_RESET} metadata: {_DIM}{config.metadata_path}{_RESET}")
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")

    if mode == "watch":
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
