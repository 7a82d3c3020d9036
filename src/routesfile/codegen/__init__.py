"""Code generation — route definitions rendered into Python modules."""

from routesfile.codegen.emitter import (
    ControllerField,
    RoutesCodeGenerator,
    generate_routes_module,
    to_dispatcher_path,
)

__all__ = [
    "ControllerField",
    "RoutesCodeGenerator",
    "generate_routes_module",
    "to_dispatcher_path",
]
