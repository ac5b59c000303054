"""Trellis CLI — route table introspection.

Entry point registered as ``trellis`` in ``pyproject.toml``::

    [project.scripts]
    trellis = "trellis.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trellis`` command."""
    parser = argparse.ArgumentParser(
        prog="trellis",
        description="Trellis — declarative route tables with middleware chains.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trellis routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:table)",
    )
    routes_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the listing as JSON",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from trellis.cli._routes import run_routes

        run_routes(args)
