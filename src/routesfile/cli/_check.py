"""``routesfile check`` — validate a routes file.

Parses the file and renders it without writing anything. Exits with
code 1 on the first invalid line, or when the routes cannot be turned
into a module (for example a bare controller name without ``--package``).
"""

import argparse
import sys

from routesfile.cli._load import load_routes
from routesfile.codegen import RoutesCodeGenerator
from routesfile.errors import EmitError
from routesfile.naming import distinct_controllers


def run_check(args: argparse.Namespace) -> None:
    """Validate ``args.routes_file`` and print a one-line summary."""
    routes = load_routes(args.routes_file)
    try:
        RoutesCodeGenerator().generate(
            routes, package=args.package or "", source_name=args.routes_file
        )
    except EmitError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    controllers = distinct_controllers(routes)
    print(f"OK: {len(routes)} routes, {len(controllers)} controllers")
