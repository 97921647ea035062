"""API route table — normalized path -> handler.

Routes are registered during setup (in code and from handler files) and
the table is frozen before the first request is served. Lookups during
serving are plain dict reads, so concurrent requests need no locking.
"""

import logging
from pathlib import Path

from perch._internal.types import Handler
from perch.paths import join_route
from perch.routing.route import Route

logger = logging.getLogger("perch.routing")

API_ROOT = "api"


class RouteTable:
    """Mapping from normalized API path to handler.

    Usage::

        table = RouteTable()
        table.register("book", get_book)      # key: "api/book"
        table.register("/v2/book/", get_v2)   # key: "api/v2/book"
        table.freeze()
        table.lookup("api/book")              # -> get_book

    Registering the same path twice keeps the last handler.
    """

    __slots__ = ("_frozen", "_prefix", "_routes")

    def __init__(self, prefix: str = API_ROOT) -> None:
        self._prefix = prefix
        self._routes: dict[str, Route] = {}
        self._frozen = False

    def register(self, raw_path: str, handler: Handler, *, source: Path | None = None) -> Route:
        """Add or replace the handler for ``<prefix>/<raw_path>``."""
        if self._frozen:
            msg = "Cannot add routes after the server has started serving requests."
            raise RuntimeError(msg)

        key = join_route(self._prefix, raw_path)
        route = Route(path=key, handler=handler, source=source)
        if key in self._routes:
            logger.debug("Route %r re-registered; the previous handler is replaced", key)
        self._routes[key] = route
        return route

    def lookup(self, normalized_path: str) -> Handler | None:
        """Return the handler registered under *normalized_path*, if any."""
        route = self._routes.get(normalized_path)
        return route.handler if route is not None else None

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> list[Route]:
        """All routes, sorted by path."""
        return [self._routes[key] for key in sorted(self._routes)]

    def __contains__(self, normalized_path: object) -> bool:
        return normalized_path in self._routes

    def __len__(self) -> int:
        return len(self._routes)
