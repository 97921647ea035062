"""Perch server class.

Mutable during setup (route registration, shared state). Frozen when
``prepare()`` runs: at ``start()``, at ASGI lifespan startup, or on the
first request, whichever comes first.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.types import Handler
from perch.config import ServerConfig
from perch.errors import ConfigurationError
from perch.routing.discovery import discover_handlers
from perch.routing.table import API_ROOT, RouteTable
from perch.server.handler import handle_request
from perch.server.pages import ensure_not_found_page
from perch.state import SharedState
from perch.static.resolver import StaticResolver

logger = logging.getLogger("perch.server")


class Server:
    """A development server for static files plus ``api/`` handlers.

    Usage::

        server = Server(port=1234, static_path="public")

        @server.route("book")
        def book(request, state):
            if request.method != "GET":
                return None  # 400 Bad Request
            return json.dumps(get_book(request.search_params.get("book_id")))

        server.start()

    Handler files dropped into ``<static_path>/api/`` are registered too:
    ``public/api/v2/book.py`` answers ``/api/v2/book``.

    Thread safety:
        Setup is single-threaded. ``prepare()`` uses a Lock + double-check
        so exactly one thread writes the 404 page, discovers handler files
        and freezes the route table, even if several workers call into the
        ASGI entry point at once.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_resolver",
        "_routes",
        "_state",
        "config",
    )

    def __init__(self, config: ServerConfig | None = None, **options: Any) -> None:
        base = config or ServerConfig()
        self.config: ServerConfig = replace(base, **options) if options else base
        self._routes = RouteTable(API_ROOT)
        self._state = SharedState()
        self._resolver = StaticResolver(
            self.config.static_root,
            dynamic_pages=self.config.dynamic_pages,
        )
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Route registration --

    def add_route(self, path: str, handler: Handler) -> None:
        """Register *handler* under ``api/<path>``.

        Leading and trailing slashes in *path* are ignored. Registering
        the same path again replaces the earlier handler.
        """
        self._check_not_frozen()
        self._routes.register(path, handler)

    def route(self, path: str) -> Callable[[Handler], Handler]:
        """Register an API handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.add_route(path, func)
            return func

        return decorator

    # -- Shared state --

    def define_globals(self, mapping: Mapping[str, Any] | SharedState) -> SharedState:
        """Set the shared state passed to every handler.

        A plain dict is wrapped by reference, so handler updates show up
        in the caller's dict. Access is not synchronized; see
        :class:`perch.state.SharedState`.
        """
        self._check_not_frozen()
        self._state = SharedState.wrap(mapping)
        return self._state

    @property
    def state(self) -> SharedState:
        """The shared state handed to handlers."""
        return self._state

    @property
    def routes(self) -> RouteTable:
        """The API route table."""
        return self._routes

    # -- Lifecycle --

    def prepare(self) -> None:
        """Run one-time setup and freeze the server.

        Writes a default ``404.html`` if the static root has none,
        registers handler files from ``<static_path>/api``, and freezes
        the route table. Safe to call more than once.

        Raises:
            OSError: The default 404 page cannot be written.
            HandlerLoadError: A handler file cannot be loaded.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def start(self, *, app_path: str | None = None) -> None:
        """Prepare the server and serve until the process is stopped."""
        if self.config.protocol == "https" and not (
            self.config.ssl_certfile and self.config.ssl_keyfile
        ):
            msg = "protocol='https' requires ssl_certfile and ssl_keyfile."
            raise ConfigurationError(msg)

        self.prepare()

        from perch.server.dev import run_dev_server

        logger.info(
            "%s server running at %s:%d...",
            self.config.protocol,
            self.config.host,
            self.config.port,
        )
        run_dev_server(self, self.config, app_path=app_path)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self.prepare()

        await handle_request(
            scope,
            receive,
            send,
            routes=self._routes,
            resolver=self._resolver,
            state=self._state,
            chunk_size=self.config.chunk_size,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Setup runs at startup so a broken handler file or an unwritable
        static root stops the server before it accepts connections.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.prepare()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _freeze(self) -> None:
        """Compile the server into its serving state.

        MUST only be called while holding _freeze_lock.
        """
        root = self.config.static_root

        # 1. Guarantee a 404 page to stream for missing assets
        ensure_not_found_page(root)

        # 2. File routes land in the same table as routes added in code
        for found in discover_handlers(root / API_ROOT):
            self._routes.register(found.route_path, found.handler, source=found.source)

        # 3. Read-only from here on
        self._routes.freeze()
        self._frozen = True

        logger.info("%d API route(s) registered", len(self._routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the server after it has started serving requests. "
                "Register routes and globals before calling start()."
            )
            raise RuntimeError(msg)
