"""In-process test client for perch servers.

Calls the server's ASGI entry point directly, so tests exercise the same
dispatch, resolution and streaming code as a real connection without
opening a socket.
"""

import json as json_module
from typing import Any

from perch._internal.asgi import Message, Scope
from perch.app import Server
from perch.http.response import Response


def build_scope(method: str, target: str, headers: dict[str, str] | None = None) -> Scope:
    """An HTTP scope for *target* (``"/api/book?book_id=1"``).

    A target without a leading slash is rooted: ``"api/book"`` becomes
    ``"/api/book"``.
    """
    path, _, query = target.partition("?")
    if not path.startswith("/"):
        path = "/" + path
    raw_headers = [(b"host", b"testserver")]
    raw_headers += [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": raw_headers,
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


class _Capture:
    """ASGI ``send`` target that assembles a Response."""

    __slots__ = ("chunks", "headers", "status")

    def __init__(self) -> None:
        self.status = 0
        self.headers: list[tuple[bytes, bytes]] = []
        self.chunks: list[bytes] = []

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", ()))
        elif message["type"] == "http.response.body":
            self.chunks.append(message.get("body", b""))

    def response(self) -> Response:
        content_type = "application/octet-stream"
        rest: list[tuple[str, str]] = []
        for name, value in self.headers:
            decoded = (name.decode("latin-1"), value.decode("latin-1"))
            if decoded[0] == "content-type":
                content_type = decoded[1]
            else:
                rest.append(decoded)
        return Response(
            body=b"".join(self.chunks),
            status=self.status,
            content_type=content_type,
            headers=tuple(rest),
        )


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for perch servers.

    Usage::

        async with TestClient(server) as client:
            response = await client.get("/api/book?book_id=1")
            assert response.status == 200
            assert response.json() == {"id": "1"}

    Entering the client runs ``server.prepare()``, as lifespan startup
    would.
    """

    __slots__ = ("server",)

    def __init__(self, server: Server) -> None:
        self.server = server

    async def __aenter__(self) -> "TestClient":
        self.server.prepare()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(self, target: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", target, headers=headers)

    async def post(
        self,
        target: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str = b"",
        json: Any = None,
    ) -> Response:
        """Send a POST; *json* is serialized and labelled ``application/json``."""
        merged = dict(headers or {})
        if json is not None:
            body = json_module.dumps(json)
            merged.setdefault("content-type", "application/json")
        return await self.request("POST", target, headers=merged, body=body)

    async def request(
        self,
        method: str,
        target: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str = b"",
    ) -> Response:
        """Run one request through the server and collect its response."""
        payload = body.encode("utf-8") if isinstance(body, str) else body
        delivered = False

        async def receive() -> Message:
            nonlocal delivered
            if delivered:
                return {"type": "http.disconnect"}
            delivered = True
            return {"type": "http.request", "body": payload, "more_body": False}

        capture = _Capture()
        await self.server(build_scope(method, target, headers), receive, capture)
        return capture.response()
