"""The request object API handlers receive.

Metadata comes from the ASGI scope up front; the body is pulled from
``receive`` only when a handler asks for it, then kept for later calls.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from perch._internal.asgi import Receive, Scope
from perch.http.headers import Headers
from perch.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An incoming HTTP request.

    Usage inside a handler::

        async def handler(request, state):
            if request.method != "GET":
                return None
            return json.dumps(find_book(request.search_params.get("book_id")))
    """

    method: str
    path: str
    headers: Headers
    search_params: QueryParams
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    receive: Receive | None = field(default=None, repr=False, compare=False)
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            search_params=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            receive=receive,
        )

    @property
    def query(self) -> QueryParams:
        """Alias of ``search_params``."""
        return self.search_params

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent them."""
        query = self.search_params.raw.decode("latin-1")
        return f"{self.path}?{query}" if query else self.path

    async def body(self) -> bytes:
        """The whole request body.

        Read once from ``receive``; a client disconnect ends the body
        early with whatever arrived.
        """
        if self._body:
            return self._body[0]
        chunks: list[bytes] = []
        while self.receive is not None:
            message = await self.receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        self._body.append(b"".join(chunks))
        return self._body[0]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        """The body parsed as JSON."""
        return json.loads(await self.body())
