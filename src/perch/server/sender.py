"""ASGI response sending — translates perch responses to ASGI messages.

In-memory responses go out as a single body message. File responses are
streamed chunk by chunk with ``more_body=True`` and a closing empty
message; the file is closed on every path, including send failures.
"""

import logging
import os

import anyio

from perch._internal.asgi import Send
from perch.http.response import FileResponse, Response
from perch.server.pages import default_not_found_page

logger = logging.getLogger("perch.server")


def _raw_headers(
    content_type: str,
    headers: tuple[tuple[str, str], ...],
    content_length: int,
) -> list[tuple[bytes, bytes]]:
    raw: list[tuple[bytes, bytes]] = [(b"content-type", content_type.encode("latin-1"))]
    for name, value in headers:
        raw.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw.append((b"content-length", str(content_length).encode("latin-1")))
    return raw


async def send_response(response: Response, send: Send) -> None:
    """Send an in-memory Response."""
    body = response.body_bytes
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response.content_type, response.headers, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})


async def send_file_response(
    response: FileResponse,
    send: Send,
    *,
    chunk_size: int = 64 * 1024,
) -> None:
    """Stream a file from disk.

    If the file can no longer be opened (deleted after resolution), the
    built-in 404 page is sent instead.
    """
    try:
        file = await anyio.open_file(response.path, "rb")
    except OSError as exc:
        logger.warning("Cannot stream %s (%s); sending the built-in 404 page", response.path, exc)
        await send_response(
            Response(body=default_not_found_page(), status=404, content_type="text/html"),
            send,
        )
        return

    async with file:
        size = os.fstat(file.wrapped.fileno()).st_size
        await send(
            {
                "type": "http.response.start",
                "status": response.status,
                "headers": _raw_headers(response.content_type, response.headers, size),
            }
        )
        while chunk := await file.read(chunk_size):
            await send({"type": "http.response.body", "body": chunk, "more_body": True})

    await send({"type": "http.response.body", "body": b"", "more_body": False})
