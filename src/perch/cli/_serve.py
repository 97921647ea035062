"""``perch serve`` — serve a static directory and its ``api/`` handler files."""

import argparse
import sys

from perch.app import Server
from perch.config import ServerConfig
from perch.errors import PerchError


def build_config(args: argparse.Namespace) -> ServerConfig:
    """Translate parsed ``serve`` flags into a ServerConfig.

    Flags left unset keep the ServerConfig defaults.
    """
    options: dict[str, object] = {
        "static_path": args.static_path,
        "dynamic_pages": args.dynamic_pages,
        "reload": args.reload,
        "log_level": args.log_level,
    }
    if args.host:
        options["host"] = args.host
    if args.port:
        options["port"] = args.port
    if args.protocol:
        options["protocol"] = args.protocol
    if args.certfile:
        options["ssl_certfile"] = args.certfile
    if args.keyfile:
        options["ssl_keyfile"] = args.keyfile
    return ServerConfig(**options)


def run_serve(args: argparse.Namespace) -> None:
    """Start a Server for ``args.static_path``."""
    server = Server(build_config(args))
    try:
        server.start()
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
