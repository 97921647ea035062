"""HTTP responses produced by the dispatcher.

``Response`` carries an in-memory body (API results, error bodies).
``FileResponse`` names a file on disk that the sender streams in chunks.
Both are immutable; ``.with_*()`` calls return new objects.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response with an in-memory body."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = JSON_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> "Response":
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Body parsed as JSON."""
        return json_module.loads(self.body_bytes)

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive), or *default*."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return default


@dataclass(frozen=True, slots=True)
class FileResponse:
    """A response whose body is streamed from *path*.

    The sender opens the file, sends ``content-length`` from its size,
    then emits the bytes in ``chunk_size`` pieces without reading the
    whole file into memory.
    """

    path: Path
    status: int = 200
    content_type: str = "application/octet-stream"
    headers: tuple[tuple[str, str], ...] = ()


def error_body(status: int, reason: str) -> str:
    """The fixed JSON error body, e.g. ``{"error":"400 Bad Request"}``."""
    return json_module.dumps({"error": f"{status} {reason}"}, separators=(",", ":"))


BAD_REQUEST = Response(body=error_body(400, "Bad Request"), status=400)
INTERNAL_ERROR = Response(body=error_body(500, "Internal Server Error"), status=500)
