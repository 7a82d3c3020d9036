"""routesfile CLI — generate, list, and validate routes files.

Entry point registered as ``routesfile`` in ``pyproject.toml``::

    [project.scripts]
    routesfile = "routesfile.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routesfile`` command."""
    parser = argparse.ArgumentParser(
        prog="routesfile",
        description="routesfile — compile a routes DSL into route registration code.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routesfile generate ----------------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Generate a routes module")
    generate_parser.add_argument("routes_file", help="Routes file name or path")
    generate_parser.add_argument(
        "--package",
        required=True,
        help="Package the generated module belongs to (e.g. myapp.web)",
    )
    generate_parser.add_argument(
        "--root",
        default=".",
        help="Project root searched for the routes file",
    )
    generate_parser.add_argument(
        "--output",
        default=None,
        help="Source root to write the module under (default: print to stdout)",
    )
    generate_parser.add_argument(
        "--module",
        default="generated_routes",
        help="Generated module name",
    )
    generate_parser.add_argument(
        "--function",
        default="configure_routes",
        help="Name of the generated registration function",
    )

    # -- routesfile routes ------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List declared routes")
    routes_parser.add_argument("routes_file", help="Path to the routes file")

    # -- routesfile check -------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a routes file")
    check_parser.add_argument("routes_file", help="Path to the routes file")
    check_parser.add_argument(
        "--package",
        default=None,
        help="Package bare controller names resolve against",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "generate":
        from routesfile.cli._generate import run_generate

        run_generate(args)
    elif args.command == "routes":
        from routesfile.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from routesfile.cli._check import run_check

        run_check(args)
