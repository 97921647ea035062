"""Tests for perch.static.mime."""

import pytest

from perch.static.mime import DEFAULT_MIME_TYPE, MIME_TYPES, mime_type_for, resolve_mime_type


class TestResolveMimeType:
    @pytest.mark.parametrize(
        ("ext", "expected"),
        [
            ("html", "text/html"),
            ("css", "text/css"),
            ("js", "text/javascript"),
            ("json", "application/json"),
            ("png", "image/png"),
            ("jpg", "image/jpg"),
            ("gif", "image/gif"),
            ("svg", "image/svg+xml"),
            ("ico", "image/x-icon"),
        ],
    )
    def test_known_extensions(self, ext: str, expected: str) -> None:
        assert resolve_mime_type(ext) == expected

    def test_leading_dot_and_case(self) -> None:
        assert resolve_mime_type(".SVG") == "image/svg+xml"

    def test_unknown_defaults(self) -> None:
        assert resolve_mime_type("exe") == DEFAULT_MIME_TYPE
        assert resolve_mime_type("") == DEFAULT_MIME_TYPE

    def test_default_key(self) -> None:
        assert MIME_TYPES["default"] == "application/octet-stream"
        assert resolve_mime_type("default") == DEFAULT_MIME_TYPE


class TestMimeTypeFor:
    def test_uses_last_suffix(self, tmp_path) -> None:
        assert mime_type_for(tmp_path / "bundle.min.js") == "text/javascript"

    def test_no_extension(self) -> None:
        assert mime_type_for("pages/cities/tokyo") == DEFAULT_MIME_TYPE

    def test_path_accepted(self) -> None:
        assert resolve_mime_type("assets/logo.SVG") == "image/svg+xml"
        assert resolve_mime_type("pages/cities/tokyo") == DEFAULT_MIME_TYPE
