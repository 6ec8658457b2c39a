"""Bundler layer — hydration entry synthesis and the external bundler."""

from pagehydra.bundler.invoker import (
    HYDRATION_TEMPLATE,
    BuildInvoker,
    Bundler,
    EsbuildBundler,
    render_entry,
)

__all__ = [
    "HYDRATION_TEMPLATE",
    "BuildInvoker",
    "Bundler",
    "EsbuildBundler",
    "render_entry",
]
