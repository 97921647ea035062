"""Static resolution — decides which file answers a non-API request.

Algorithm for a URL path:

1. A path ending in ``/`` looks for ``<root>/<path>/index.html``.
2. Any other path looks for ``<root>/<path>`` verbatim.
3. The candidate is probed by opening it for reading.
4. Found: serve it with status 200.
5. Missing:
   - with dynamic pages enabled and a page-like path (no extension in
     the last segment, or a trailing slash), serve ``<root>/index.html``
     with status 200 so the front-end router can take over;
   - otherwise serve ``<root>/404.html`` with status 404.

The page-like test is a naming convention, not knowledge of the
front-end's routes: ``/cities/tokyo`` gets ``index.html`` whether or not
the application knows that city, while ``/cities/tokyo.png`` gets the
404 page.
"""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import anyio

from perch.paths import is_outside_root, normalize

logger = logging.getLogger("perch.static")

INDEX_FILE = "index.html"
NOT_FOUND_FILE = "404.html"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of static resolution.

    ``stream_path`` is ``None`` only when neither the requested file nor
    a ``404.html`` page exists; the sender then uses the built-in page.
    """

    stream_path: Path | None
    status: int


def is_page_like(relative: str, *, trailing_slash: bool) -> bool:
    """True for paths that look like front-end routes rather than assets."""
    if trailing_slash:
        return True
    return PurePosixPath(relative).suffix == ""


class StaticResolver:
    """Resolves URL paths against a static root directory.

    Usage::

        resolver = StaticResolver("public", dynamic_pages=True)
        resolution = await resolver.resolve("/pages/cities/tokyo")
    """

    __slots__ = ("_dynamic_pages", "_root")

    def __init__(self, root: str | Path, *, dynamic_pages: bool = True) -> None:
        self._root = Path(root)
        self._dynamic_pages = dynamic_pages

    def candidate_for(self, url_path: str) -> Path | None:
        """The file a URL path names, or ``None`` if it climbs above the root."""
        relative = normalize(url_path)
        if is_outside_root(relative):
            return None
        base = self._root / relative if relative else self._root
        if url_path.endswith(("/", "\\")):
            return base / INDEX_FILE
        return base

    async def resolve(self, url_path: str) -> Resolution:
        """Pick the file and status code answering *url_path*."""
        candidate = self.candidate_for(url_path)
        if candidate is not None and await self._probe(candidate):
            return Resolution(candidate, 200)

        logger.warning("Not found: %s", url_path)

        relative = normalize(url_path)
        trailing_slash = url_path.endswith(("/", "\\"))
        if self._dynamic_pages and is_page_like(relative, trailing_slash=trailing_slash):
            index = self._root / INDEX_FILE
            if index != candidate and await self._probe(index):
                return Resolution(index, 200)

        not_found = self._root / NOT_FOUND_FILE
        if await self._probe(not_found):
            return Resolution(not_found, 404)
        return Resolution(None, 404)

    async def _probe(self, path: Path) -> bool:
        """Open and close *path* to confirm it is a readable regular file.

        Errors other than "missing" (permissions, a directory in place
        of a file) are logged and reported the same as missing.
        """
        try:
            async with await anyio.open_file(path, "rb"):
                return True
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            logger.warning("Cannot open %s (%s); treating as not found", path, exc)
            return False
