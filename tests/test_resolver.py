"""Tests for pagehydra.registry.resolver — strict and fallback resolution."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from pagehydra._errors import ComponentNotFoundError, HydraError
from pagehydra.app import resolve
from pagehydra.registry.metadata import RegistryEntry, dump_metadata
from pagehydra.registry.resolver import ComponentResolver


@pytest.fixture
def metadata_path(tmp_path: Path) -> Path:
    path = tmp_path / "metadata.json"
    path.write_text(dump_metadata({
        "RegisterPage": RegistryEntry(
            script_file_name="register.page.js",
            original_path="pages/video/register.page.tsx",
            output_path="public/js/pages/video/register.page.js",
        ),
    }))
    return path


class TestStrictMode:
    def test_registered_component(self, metadata_path: Path) -> None:
        assert ComponentResolver(metadata_path).resolve("RegisterPage") == "register.page.js"

    def test_missing_component_raises_not_found(self, metadata_path: Path) -> None:
        with pytest.raises(ComponentNotFoundError) as exc_info:
            ComponentResolver(metadata_path, strict=True).resolve("UserProfilePage")
        assert exc_info.value.component_name == "UserProfilePage"
        assert "UserProfilePage" in str(exc_info.value)

    def test_not_found_is_lookup_and_hydra_error(self) -> None:
        assert issubclass(ComponentNotFoundError, LookupError)
        assert issubclass(ComponentNotFoundError, HydraError)

    def test_corrupt_file_degrades_to_not_found(self, tmp_path: Path) -> None:
        path = tmp_path / "metadata.json"
        path.write_text("{{{")
        with patch.object(sys, "stderr", io.StringIO()), pytest.raises(ComponentNotFoundError):
            ComponentResolver(path).resolve("RegisterPage")

    def test_entry_without_script_name_counts_as_missing(self, tmp_path: Path) -> None:
        path = tmp_path / "metadata.json"
        path.write_text('{"RegisterPage": {"originalPath": "pages/register.page.tsx"}}')
        with pytest.raises(ComponentNotFoundError):
            ComponentResolver(path).resolve("RegisterPage")


class TestFallbackMode:
    def test_registered_component_still_uses_registry(self, metadata_path: Path) -> None:
        resolver = ComponentResolver(metadata_path, strict=False)
        assert resolver.resolve("RegisterPage") == "register.page.js"

    def test_missing_component_guesses_with_warning(self, metadata_path: Path) -> None:
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            result = ComponentResolver(metadata_path, strict=False).resolve("UserProfilePage")
        assert result == "user-profile.page.js"
        assert "falling back" in buf.getvalue()

    def test_missing_file_guesses(self, tmp_path: Path) -> None:
        with patch.object(sys, "stderr", io.StringIO()):
            result = ComponentResolver(tmp_path / "nope.json", strict=False).resolve("HomePage")
        assert result == "home.page.js"


class TestResolveFunction:
    def test_strict_by_default(self, metadata_path: Path) -> None:
        with pytest.raises(ComponentNotFoundError):
            resolve("GhostPage", metadata_path)

    def test_explicit_fallback(self, metadata_path: Path) -> None:
        with patch.object(sys, "stderr", io.StringIO()):
            assert resolve("GhostPage", metadata_path, strict=False) == "ghost.page.js"

    def test_rereads_file_each_call(self, metadata_path: Path) -> None:
        assert resolve("RegisterPage", metadata_path) == "register.page.js"
        metadata_path.write_text(dump_metadata({
            "RegisterPage": RegistryEntry("register.v2.page.js", "", ""),
        }))
        assert resolve("RegisterPage", metadata_path) == "register.v2.page.js"
