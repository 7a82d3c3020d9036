"""Shared routes file loading for CLI commands."""

import sys

from routesfile.errors import RouteDefinitionError, SourceNotFound
from routesfile.model import RouteDefinition
from routesfile.parser import RoutesParser


def load_routes(path: str) -> list[RouteDefinition]:
    """Parse *path*, printing diagnostics and exiting 1 on failure."""
    try:
        return RoutesParser().parse_file(path)
    except SourceNotFound as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except RouteDefinitionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except (UnicodeDecodeError, OSError) as exc:
        print(f"Error: cannot read {path}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
