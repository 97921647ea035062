"""Perch CLI — serve a directory, run a server object, list API routes.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — a development server for single-page applications.",
    )
    # --log-level is accepted after any subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Logging level (default: info)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch serve ------------------------------------------------------
    serve_parser = subparsers.add_parser(
        "serve", parents=[common], help="Serve a static directory"
    )
    serve_parser.add_argument(
        "static_path",
        nargs="?",
        default="./",
        help="Directory to serve; handler files live in its api/ folder",
    )
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--protocol",
        default=None,
        help="http or https (anything else falls back to http)",
    )
    serve_parser.add_argument(
        "--no-dynamic-pages",
        dest="dynamic_pages",
        action="store_false",
        help="Answer unmatched page paths with 404 instead of index.html",
    )
    serve_parser.add_argument("--certfile", default=None, help="TLS certificate (https)")
    serve_parser.add_argument("--keyfile", default=None, help="TLS private key (https)")
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change",
    )

    # -- perch run --------------------------------------------------------
    run_parser = subparsers.add_parser(
        "run", parents=[common], help="Start a Server defined in Python"
    )
    run_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:server)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", parents=[common], help="List API routes")
    routes_parser.add_argument(
        "static_path",
        nargs="?",
        default="./",
        help="Directory whose api/ folder is scanned",
    )
    routes_parser.add_argument(
        "--app",
        default=None,
        help="Import string of a Server whose routes to list instead",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        from perch.cli._serve import run_serve

        run_serve(args)
    elif args.command == "run":
        from perch.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
