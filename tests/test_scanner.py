"""Tests for pagehydra.content.scanner — source discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagehydra._errors import ScanError
from pagehydra.content.scanner import ascan, scan


class TestScan:
    def test_finds_nested_sources(self, tmp_project: Path) -> None:
        found = scan(tmp_project / "pages", "page.tsx")
        pages = tmp_project / "pages"
        assert found == {
            pages / "user" / "register.page.tsx",
            pages / "video" / "register.page.tsx",
            pages / "user-profile.page.tsx",
        }

    def test_returns_absolute_paths(self, tmp_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_project)
        found = scan("pages", "page.tsx")
        assert found
        assert all(path.is_absolute() for path in found)

    def test_keeps_symlinked_root_as_given(
        self, tmp_project: Path, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        link = tmp_path_factory.mktemp("links") / "pages"
        link.symlink_to(tmp_project / "pages", target_is_directory=True)
        found = scan(link, "page.tsx")
        assert link / "user-profile.page.tsx" in found
        assert all(path.is_relative_to(link) for path in found)

    def test_skips_non_matching_files(self, tmp_project: Path) -> None:
        found = scan(tmp_project / "pages", "page.tsx")
        assert all(path.name.endswith("page.tsx") for path in found)

    def test_directory_with_suffix_is_not_a_source(self, tmp_project: Path) -> None:
        (tmp_project / "pages" / "odd.page.tsx").mkdir()
        found = scan(tmp_project / "pages", "page.tsx")
        assert tmp_project / "pages" / "odd.page.tsx" not in found

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert scan(tmp_path, "page.tsx") == set()

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ScanError, match="Cannot scan"):
            scan(tmp_path / "nope", "page.tsx")

    def test_file_as_root_raises(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(ScanError):
            scan(target, "page.tsx")


class TestAscan:
    @pytest.mark.asyncio
    async def test_matches_sync_scan(self, tmp_project: Path) -> None:
        assert await ascan(tmp_project / "pages", "page.tsx") == scan(
            tmp_project / "pages", "page.tsx"
        )
