"""Tests for perch.server.pages — the built-in 404 page."""

import pytest

from perch.server.pages import default_not_found_page, ensure_not_found_page


class TestDefaultNotFoundPage:
    def test_content(self) -> None:
        page = default_not_found_page()
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>404 Not Found</title>" in page
        assert "<body>404 Not Found</body>" in page

    def test_title_escaped(self) -> None:
        assert "<script>" not in default_not_found_page("<script>")


class TestEnsureNotFoundPage:
    def test_writes_missing_page(self, tmp_path) -> None:
        page = ensure_not_found_page(tmp_path)
        assert page == tmp_path / "404.html"
        assert page.read_text(encoding="utf-8") == default_not_found_page()

    def test_keeps_existing_page(self, tmp_path) -> None:
        (tmp_path / "404.html").write_text("custom")
        ensure_not_found_page(tmp_path)
        assert (tmp_path / "404.html").read_text() == "custom"

    def test_unwritable_root_raises(self, tmp_path) -> None:
        with pytest.raises(OSError):
            ensure_not_found_page(tmp_path / "does-not-exist")
