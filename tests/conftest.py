"""Shared test fixtures for pagehydra."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from pagehydra._errors import BuildError
from pagehydra.config import HydraConfig


class FakeBundler:
    """In-process stand-in for esbuild.

    Records every call and writes a placeholder bundle to the outfile.
    Builds whose entry program mentions a name in ``fail_on`` raise
    BuildError.  When ``gate`` is set, each build waits on it before
    finishing, so tests can hold a build in flight.
    """

    def __init__(
        self,
        *,
        fail_on: tuple[str, ...] = (),
        gate: asyncio.Event | None = None,
    ) -> None:
        self.calls: list[tuple[str, Path, Path]] = []
        self.fail_on = fail_on
        self.gate = gate
        self.started = asyncio.Event()

    async def build(self, entry_content: str, resolve_dir: Path, outfile: Path) -> None:
        self.calls.append((entry_content, resolve_dir, outfile))
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if any(name in entry_content for name in self.fail_on):
            msg = "Could not resolve \"./missing\""
            raise BuildError(msg, stderr=msg)
        outfile.parent.mkdir(parents=True, exist_ok=True)
        outfile.write_text("// bundle\n")


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project with page sources.

    Layout::

        pages/user/register.page.tsx
        pages/video/register.page.tsx
        pages/user-profile.page.tsx
        pages/styles.css

    """
    pages = tmp_path / "pages"
    (pages / "user").mkdir(parents=True)
    (pages / "video").mkdir()
    (pages / "user" / "register.page.tsx").write_text(
        "export default function Register() { return <form />; }\n"
    )
    (pages / "video" / "register.page.tsx").write_text(
        "export default function Register() { return <video />; }\n"
    )
    (pages / "user-profile.page.tsx").write_text(
        "export default function UserProfile() { return <div />; }\n"
    )
    (pages / "styles.css").write_text("body { margin: 0; }\n")
    return tmp_path


@pytest.fixture
def config(tmp_project: Path) -> HydraConfig:
    """A HydraConfig rooted at the temp project."""
    return HydraConfig(root=tmp_project)


@pytest.fixture
def bundler() -> FakeBundler:
    return FakeBundler()


@pytest.fixture
def make_bundler() -> type[FakeBundler]:
    """The FakeBundler class, for tests that need gates or failures."""
    return FakeBundler
