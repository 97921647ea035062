"""``perch run`` — start a Server defined in a Python module."""

import argparse
import sys
from dataclasses import replace

from perch.cli._resolve import resolve_app
from perch.errors import PerchError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` to a Server and start it.

    ``--host`` and ``--port`` override the server's own config. The
    import string is forwarded so pounce can reimport it on reload.
    """
    try:
        server = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if overrides:
        server.config = replace(server.config, **overrides)

    try:
        server.start(app_path=args.app)
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
