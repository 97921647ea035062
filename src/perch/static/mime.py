"""Extension -> content type mapping for static responses."""

from pathlib import PurePath, PurePosixPath

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    "default": DEFAULT_MIME_TYPE,
    "html": "text/html",
    "css": "text/css",
    "js": "text/javascript",
    "mjs": "text/javascript",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "webp": "image/webp",
    "txt": "text/plain",
    "map": "application/json",
    "xml": "application/xml",
    "pdf": "application/pdf",
    "wasm": "application/wasm",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "webmanifest": "application/manifest+json",
}


def resolve_mime_type(extension: str) -> str:
    """Content type for an extension (``"svg"``, ``".SVG"``) or a file path.

    Unknown or empty extensions get ``application/octet-stream``.
    """
    key = (PurePosixPath(extension).suffix or extension).lower().lstrip(".")
    if not key or key == "default":
        return DEFAULT_MIME_TYPE
    return MIME_TYPES.get(key, DEFAULT_MIME_TYPE)


def mime_type_for(path: str | PurePath) -> str:
    """Content type for the extension of *path*."""
    return resolve_mime_type(PurePath(path).suffix)
