"""``routesfile routes`` — list declared routes.

Prints a table of METHOD, PATH, HANDLER, and route name for every
declaration, in file order.
"""

import argparse

from routesfile.cli._load import load_routes


def run_routes(args: argparse.Namespace) -> None:
    """List the routes declared in ``args.routes_file``."""
    routes = load_routes(args.routes_file)
    if not routes:
        print("No routes declared.")
        return

    # Build rows: (method, path, handler, name)
    rows = [(r.method.value, r.path, r.handler_ref, r.route_name) for r in routes]

    # Column widths
    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header
    max_handler = max(max(len(r[2]) for r in rows), 7)  # "HANDLER" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{:<{max_handler}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER", "NAME"))
    sep_len = max_method + max_path + max_handler + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row).rstrip())
