"""ASGI request dispatch — API routes first, static files otherwise.

Per request:

- **Received**: build a ``Request`` and normalize its path.
- **API match**: call the handler with ``(request, state)`` and await it.
  A falsy result is a rejection (400 with a fixed JSON body); anything
  else is the 200 body. A handler that raises is logged and answered
  with 500, and the server keeps serving.
- **No match**: resolve the path against the static root and stream the
  chosen file with its status code and content type.

Nothing is retried; a failure ends only the request it happened in.
"""

import json
import logging
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke_handler
from perch._internal.types import Handler
from perch.http.request import Request
from perch.http.response import BAD_REQUEST, INTERNAL_ERROR, FileResponse, Response
from perch.paths import normalize
from perch.routing.table import RouteTable
from perch.server.pages import default_not_found_page
from perch.server.sender import send_file_response, send_response
from perch.state import SharedState
from perch.static.mime import mime_type_for
from perch.static.resolver import StaticResolver

logger = logging.getLogger("perch.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    routes: RouteTable,
    resolver: StaticResolver,
    state: SharedState,
    chunk_size: int = 64 * 1024,
) -> None:
    """Process a single HTTP request."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    handler = routes.lookup(normalize(request.path))
    if handler is not None:
        response = await call_api_handler(handler, request, state)
        logger.debug("%d %s %s", response.status, request.method, request.path)
        await send_response(response, send)
        return

    static = await resolve_static(request.path, resolver)
    logger.debug("%d %s %s", static.status, request.method, request.path)
    if isinstance(static, FileResponse):
        await send_file_response(static, send, chunk_size=chunk_size)
    else:
        await send_response(static, send)


async def call_api_handler(handler: Handler, request: Request, state: SharedState) -> Response:
    """Run an API handler and turn its result into a Response."""
    try:
        result = await invoke_handler(handler, request, state)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        return INTERNAL_ERROR

    if not result:
        return BAD_REQUEST
    return to_response(result)


def to_response(result: Any) -> Response:
    """Convert a truthy handler result into a 200 Response.

    Strings and bytes are sent verbatim (handlers are expected to return
    JSON text, but it is not validated). A ``Response`` passes through.
    Other values are serialized with ``json.dumps``.
    """
    if isinstance(result, Response):
        return result
    if isinstance(result, (str, bytes)):
        return Response(body=result)
    return Response(body=json.dumps(result))


async def resolve_static(url_path: str, resolver: StaticResolver) -> FileResponse | Response:
    """Map a non-API path to the file (or built-in page) that answers it."""
    resolution = await resolver.resolve(url_path)
    if resolution.stream_path is None:
        return Response(body=default_not_found_page(), status=404, content_type="text/html")
    return FileResponse(
        path=resolution.stream_path,
        status=resolution.status,
        content_type=mime_type_for(resolution.stream_path),
    )
