"""Pagehydra CLI — pagehydra build / pagehydra watch / pagehydra resolve.

Entry point for the ``pagehydra`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _add_build_options(parser: argparse.ArgumentParser) -> None:
    """Options shared by build and watch. Unset options defer to the config file."""
    parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    parser.add_argument("--target-dir", help="Directory containing page sources")
    parser.add_argument("--suffix", help="Build target file suffix (e.g. page.tsx)")
    parser.add_argument("--output-dir", help="Bundle output directory")
    parser.add_argument("--metadata", dest="metadata_file", help="Registry file")
    parser.add_argument("--esbuild", help="esbuild executable")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pagehydra CLI."""
    parser = argparse.ArgumentParser(
        prog="pagehydra",
        description="Bundle page components for hydration and keep their registry current.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pagehydra build
    build_parser = subparsers.add_parser("build", help="Build every page once")
    _add_build_options(build_parser)

    # pagehydra watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Build every page, then rebuild pages as they change",
    )
    _add_build_options(watch_parser)

    # pagehydra resolve
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the bundle file name registered for a component",
    )
    resolve_parser.add_argument("component", help="Component name (e.g. UserProfilePage)")
    resolve_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    resolve_parser.add_argument("--metadata", dest="metadata_file", help="Registry file")
    resolve_parser.add_argument(
        "--fallback",
        action="store_true",
        help="Guess a conventional file name instead of failing on unknown components",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from pagehydra import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from pagehydra._errors import HydraError
    from pagehydra.app import build_all, resolve, watch_build
    from pagehydra.config_loader import load_config

    try:
        if args.command == "resolve":
            config = load_config(Path(args.root), metadata_file=args.metadata_file)
            strict = config.strict and not args.fallback
            print(resolve(args.component, config.metadata_path, strict=strict))
            return

        options = {
            "target_dir": args.target_dir,
            "suffix": args.suffix,
            "output_dir": args.output_dir,
            "metadata_file": args.metadata_file,
            "esbuild": args.esbuild,
        }
        if args.command == "build":
            build_all(args.root, **options)
        elif args.command == "watch":
            watch_build(args.root, **options)
    except HydraError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
