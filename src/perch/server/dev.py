"""Development server.

Starts a pounce ASGI server with the live perch Server object. Pounce owns
the transport: sockets, HTTP parsing, keep-alive, and TLS.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.config import ServerConfig


def run_dev_server(
    app: object,
    config: ServerConfig,
    *,
    app_path: str | None = None,
) -> None:
    """Serve *app* with pounce until the process is stopped.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:server"``),
    but perch has a live ``Server`` object, so ``pounce.Server`` is used
    directly with the ASGI callable.

    Args:
        app: ASGI callable (perch Server instance).
        config: Host, port, TLS files, reload flag, and log level.
        app_path: Optional ``"module:attribute"`` import string. With
            reload enabled, pounce reimports the app on each cycle.
    """
    from pounce.config import ServerConfig as PounceConfig
    from pounce.server import Server

    tls = config.protocol == "https"
    pounce_config = PounceConfig(
        host=config.host,
        port=config.port,
        workers=1,
        reload=config.reload,
        log_level=config.log_level,
        ssl_certfile=config.ssl_certfile if tls else None,
        ssl_keyfile=config.ssl_keyfile if tls else None,
    )
    server = Server(pounce_config, app, app_path=app_path)
    server.run()
