"""``perch routes`` — list API routes.

Prepares a server (which scans ``<static_path>/api`` for handler files)
and prints every route with its handler and where it came from.
"""

import argparse
import sys

from perch.app import Server
from perch.cli._resolve import resolve_app
from perch.errors import PerchError


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATH, HANDLER and SOURCE."""
    if args.app:
        try:
            server = resolve_app(args.app)
        except (ModuleNotFoundError, AttributeError, TypeError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
    else:
        server = Server(static_path=args.static_path)

    try:
        server.prepare()
    except (PerchError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = server.routes.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = [
        ("/" + route.path, route.handler_name, str(route.source) if route.source else "(code)")
        for route in routes
    ]

    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    max_handler = max(max(len(r[1]) for r in rows), 7)  # "HANDLER" header

    fmt = f"{{:<{max_path}}}  {{:<{max_handler}}}  {{}}"
    print(fmt.format("PATH", "HANDLER", "SOURCE"))
    sep_len = max_path + max_handler + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for path, handler_name, source in rows:
        print(fmt.format(path, handler_name, source))
