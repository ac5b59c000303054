"""``trellis routes`` — list registered routes.

Resolves an import string to a route table and prints its route
listing, as a table or as JSON for documentation tooling.
"""

import argparse
import json
import sys

from trellis.cli._resolve import resolve_table
from trellis.routing.route import RouteInfo


def _note(info: RouteInfo) -> str:
    if info.redirect_target is not None:
        return f"-> {info.redirect_target}"
    if info.origin_path is not None:
        return f"(moved from {info.origin_path})"
    if info.state:
        return ", ".join(f"{key}={value}" for key, value in info.state.items())
    return ""


def run_routes(args: argparse.Namespace) -> None:
    """Print the route listing of ``args.app``."""
    try:
        table = resolve_table(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = table.route_list()

    if args.json:
        print(json.dumps([info.as_dict() for info in routes], indent=2, default=str))
        return

    if not routes:
        print("No routes registered.")
        return

    rows = [(info.method.value, info.path, _note(info)) for info in routes]

    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "NOTE").rstrip())
    sep_len = max_method + max_path + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for method, path, note in rows:
        print(fmt.format(method, path, note).rstrip())
