"""Tests for pagehydra.bundler.invoker — entry synthesis and bundler calls."""

from __future__ import annotations

import asyncio
import io
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pagehydra._errors import BuildError
from pagehydra.bundler.invoker import BuildInvoker, EsbuildBundler, render_entry
from pagehydra.config import HydraConfig
from pagehydra.observability import BuildCollector, BundleBuilt, BundleFailed


class TestRenderEntry:
    def test_imports_page_and_hydrates(self) -> None:
        entry = render_entry("./pages/user/register.page.tsx")
        assert 'import Page from "./pages/user/register.page.tsx";' in entry
        assert 'from "react-dom/client"' in entry
        assert 'document.getElementById("app")' in entry
        assert "<Page {...window.__SERVER_DATA__} />" in entry


class TestBuildInvoker:
    @pytest.mark.asyncio
    async def test_calls_bundler_with_entry_root_and_outfile(
        self, config: HydraConfig, bundler
    ) -> None:
        source = config.target_path / "user" / "register.page.tsx"
        invoker = BuildInvoker(config, bundler)
        with patch.object(sys, "stderr", io.StringIO()):
            unit = await invoker.build(source)

        assert len(bundler.calls) == 1
        entry, resolve_dir, outfile = bundler.calls[0]
        assert 'import Page from "./pages/user/register.page.tsx"' in entry
        assert resolve_dir == config.root
        assert outfile == config.root / "public/js/pages/user/register.page.js"
        assert outfile.is_file()
        assert unit.component_name == "RegisterPage"

    @pytest.mark.asyncio
    async def test_source_is_not_modified(self, config: HydraConfig, bundler) -> None:
        source = config.target_path / "user-profile.page.tsx"
        before = source.read_text()
        with patch.object(sys, "stderr", io.StringIO()):
            await BuildInvoker(config, bundler).build(source)
        assert source.read_text() == before

    @pytest.mark.asyncio
    async def test_failure_propagates_with_source(self, config: HydraConfig, make_bundler) -> None:
        bundler = make_bundler(fail_on=("register",))
        collector = BuildCollector()
        source = config.target_path / "user" / "register.page.tsx"

        with pytest.raises(BuildError, match="Could not resolve") as exc_info:
            await BuildInvoker(config, bundler, collector).build(source)

        assert exc_info.value.source == source
        assert not (config.root / "public/js/pages/user/register.page.js").exists()
        failures = collector.log.query(event_type=BundleFailed)
        assert failures[0].source == "pages/user/register.page.tsx"

    @pytest.mark.asyncio
    async def test_records_successful_build(self, config: HydraConfig, bundler) -> None:
        collector = BuildCollector()
        with patch.object(sys, "stderr", io.StringIO()):
            await BuildInvoker(config, bundler, collector).build(
                config.target_path / "user-profile.page.tsx"
            )
        (event,) = collector.log.query(event_type=BundleBuilt)
        assert event.component_name == "UserProfilePage"
        assert event.outfile == "public/js/pages/user-profile.page.js"

    def test_defaults_to_esbuild(self, config: HydraConfig) -> None:
        invoker = BuildInvoker(config)
        assert isinstance(invoker._bundler, EsbuildBundler)


class TestEsbuildBundler:
    def test_command(self, tmp_path: Path) -> None:
        outfile = tmp_path / "out.js"
        command = EsbuildBundler("esbuild").command(outfile)
        assert command[0] == "esbuild"
        assert "--bundle" in command
        assert "--platform=browser" in command
        assert "--loader=tsx" in command
        assert f"--outfile={outfile}" in command

    @pytest.mark.asyncio
    async def test_missing_executable_raises_build_error(self, tmp_path: Path) -> None:
        bundler = EsbuildBundler(str(tmp_path / "no-such-esbuild"))
        with pytest.raises(BuildError, match="Cannot run"):
            await bundler.build("export {}", tmp_path, tmp_path / "out.js")

    @pytest.mark.asyncio
    async def test_entry_passed_on_stdin(self, tmp_path: Path) -> None:
        proc = MagicMock()
        proc.returncode = 0
        proc.communicate = AsyncMock(return_value=(b"", b""))
        spawn = AsyncMock(return_value=proc)

        with patch.object(asyncio, "create_subprocess_exec", spawn):
            await EsbuildBundler().build("ENTRY", tmp_path, tmp_path / "out.js")

        proc.communicate.assert_awaited_once_with(b"ENTRY")
        assert spawn.call_args.kwargs["cwd"] == tmp_path

    @pytest.mark.asyncio
    async def test_nonzero_exit_raises_with_stderr(self, tmp_path: Path) -> None:
        proc = MagicMock()
        proc.returncode = 1
        proc.communicate = AsyncMock(return_value=(b"", b"X [ERROR] Could not resolve \"react\""))

        with patch.object(asyncio, "create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(BuildError, match="status 1") as exc_info:
                await EsbuildBundler().build("ENTRY", tmp_path, tmp_path / "out.js")

        assert "Could not resolve" in exc_info.value.stderr
