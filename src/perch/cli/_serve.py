"""``perch serve`` — run a StaticFilter on the pounce server."""

import argparse
import logging
import sys

from perch.config import FilterConfig
from perch.errors import ConfigurationError
from perch.filter import StaticFilter


def build_filter(args: argparse.Namespace) -> StaticFilter:
    """Build the filter described by the parsed ``serve`` arguments."""
    config = FilterConfig(
        mount_path=args.mount,
        application=args.app,
        static_resources=args.package,
        external_static_resources=args.directory,
        welcome_file=args.welcome_file,
    )
    config.validate()
    return StaticFilter(config)


def serve(args: argparse.Namespace) -> None:
    """Configure logging, build the filter, and start the server."""
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.directory is None and args.package is None and args.app is None:
        print("Error: nothing to serve; pass a directory, --package, or --app", file=sys.stderr)
        raise SystemExit(1)

    try:
        static_filter = build_filter(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from perch.server.runner import run_server

    config = static_filter.config
    run_server(static_filter, args.host or config.host, args.port or config.port)
