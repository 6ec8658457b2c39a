"""Tests for pagehydra package exports and metadata."""

import pagehydra


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(pagehydra.__version__, str)
        assert "0.1.0" in pagehydra.__version__

    def test_all_exports_resolvable(self) -> None:
        for name in pagehydra.__all__:
            assert getattr(pagehydra, name) is not None

    def test_scan_is_scanner(self) -> None:
        from pagehydra.content.scanner import scan

        assert pagehydra.scan is scan

    def test_invalid_attribute_raises(self) -> None:
        import pytest

        with pytest.raises(AttributeError, match="no attribute"):
            pagehydra.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
