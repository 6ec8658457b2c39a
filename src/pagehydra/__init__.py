"""Pagehydra — incremental page bundle builds with a component registry.

Builds every ``*page.tsx`` source under a directory into a standalone
hydration bundle and maintains a JSON registry mapping component names to
bundle files, so a rendering process can find a page's script by name.

Quick start::

    import pagehydra

    pagehydra.build_all("my-app/")                   # One-shot build
    pagehydra.watch_build("my-app/")                 # Build, then rebuild on change
    pagehydra.resolve("UserProfilePage", "my-app/public/js/metadata.json")

"""

__version__ = "0.1.0"
__all__ = [
    "HydraConfig",
    "__version__",
    "build_all",
    "resolve",
    "scan",
    "watch_build",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pagehydra`` fast; the watcher and bundler modules are
    only loaded when a build actually runs.
    """
    if name == "HydraConfig":
        from pagehydra.config import HydraConfig

        return HydraConfig

    if name == "scan":
        from pagehydra.content.scanner import scan

        return scan

    if name in ("build_all", "watch_build", "resolve"):
        from pagehydra import app

        return getattr(app, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
