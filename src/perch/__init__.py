"""Perch — a small development server for single-page applications.

Serves static files from a directory and answers ``api/`` requests with
handlers registered in code or dropped into ``<static_path>/api/``.

Basic usage::

    from perch import Server

    server = Server(port=1234, static_path="public")

    @server.route("book")
    def book(request, state):
        if request.method != "GET":
            return None  # -> 400 {"error":"400 Bad Request"}
        return json.dumps({"id": request.search_params.get("book_id")})

    server.start()

File routes::

    # public/api/v2/book.py  ->  GET /api/v2/book
    async def handler(request, state):
        return json.dumps(await load_book())
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FileResponse",
    "HandlerLoadError",
    "PerchError",
    "Request",
    "Response",
    "Server",
    "ServerConfig",
    "SharedState",
    "normalize",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "Server":
        from perch.app import Server

        return Server

    if name == "ServerConfig":
        from perch.config import ServerConfig

        return ServerConfig

    if name == "SharedState":
        from perch.state import SharedState

        return SharedState

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name in ("Response", "FileResponse"):
        from perch.http import response as _resp

        return getattr(_resp, name)

    if name == "normalize":
        from perch.paths import normalize

        return normalize

    if name in ("PerchError", "ConfigurationError", "HandlerLoadError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
