"""Perch CLI — serve static files in front of an application.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — static assets in front of an ASGI application.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve static files")
    serve_parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="External directory to serve",
    )
    serve_parser.add_argument(
        "--package",
        default=None,
        help="Bundled package location (e.g. myapp:public)",
    )
    serve_parser.add_argument("--mount", default="", help="Mount path (e.g. /app)")
    serve_parser.add_argument(
        "--app",
        default=None,
        help="Application import string (e.g. myapp:application)",
    )
    serve_parser.add_argument("--welcome-file", default="index.html", help="Directory index file")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from perch.cli._serve import serve

        serve(args)
