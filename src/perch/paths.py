"""Path normalization shared by the route table and static resolution.

Route keys and request paths go through the same ``normalize()`` so a
handler registered as ``"book"``, ``"/book"`` or ``"book/"`` is found for
a request to ``/api/book`` or ``/api/book/``.
"""

import posixpath
import re

_SEPARATORS_RE = re.compile(r"[/\\]+")


def normalize(path: str) -> str:
    """Canonicalize *path* into a comparable form.

    Backslashes become forward slashes, repeated separators collapse,
    ``.`` and ``..`` segments are resolved, and one leading and one
    trailing separator are stripped::

        normalize("/api/book/")      -> "api/book"
        normalize("api//v2/./book")  -> "api/v2/book"
        normalize("/a/../b")         -> "b"
        normalize("/")               -> ""

    Idempotent: ``normalize(normalize(p)) == normalize(p)``.
    """
    collapsed = _SEPARATORS_RE.sub("/", path)
    if not collapsed:
        return ""
    resolved = posixpath.normpath(collapsed)
    if resolved.startswith("/"):
        resolved = resolved[1:]
    if resolved.endswith("/"):
        resolved = resolved[:-1]
    return "" if resolved == "." else resolved


def join_route(prefix: str, path: str) -> str:
    """Join *path* under *prefix* and normalize.

    Unlike ``posixpath.join``, an absolute *path* does not discard the
    prefix: ``join_route("api", "/book") == "api/book"``.
    """
    return normalize(f"{prefix}/{path}")


def is_outside_root(normalized: str) -> bool:
    """True if a normalized relative path climbs above its root (``../x``)."""
    return normalized == ".." or normalized.startswith("../")
