"""routesfile — compile a routes DSL into route registration code.

One route per line, method, path, and handler::

    GET  /users/:id  app.controllers.UserController.show(id: Int)

Parse and generate::

    from routesfile import generate_routes_module, parse_routes

    routes = parse_routes(text)
    source = generate_routes_module(routes, package="app")

The generated module exposes ``configure_routes(router)``, which
registers every route on a ``routesfile.runtime.Router``.
"""

__version__ = "0.1.0"
__all__ = [
    "Declaration",
    "GeneratorConfig",
    "HandlerRegistry",
    "HttpMethod",
    "MethodParameter",
    "PathParameter",
    "RouteDefinition",
    "RouteDefinitionError",
    "RoutesCodeGenerator",
    "RoutesFileError",
    "RoutesParser",
    "RoutesProcessor",
    "generate_routes",
    "generate_routes_module",
    "parse_routes",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routesfile`` fast while providing a clean top-level API.
    """
    if name in ("RoutesParser", "parse_routes"):
        from routesfile import parser as _parser

        return getattr(_parser, name)

    if name in ("RoutesCodeGenerator", "generate_routes_module"):
        from routesfile import codegen as _codegen

        return getattr(_codegen, name)

    if name in ("HttpMethod", "MethodParameter", "PathParameter", "RouteDefinition"):
        from routesfile import model as _model

        return getattr(_model, name)

    if name in ("Declaration", "RoutesProcessor", "generate_routes"):
        from routesfile import processor as _processor

        return getattr(_processor, name)

    if name == "GeneratorConfig":
        from routesfile.config import GeneratorConfig

        return GeneratorConfig

    if name == "HandlerRegistry":
        from routesfile.registry import HandlerRegistry

        return HandlerRegistry

    if name in ("RoutesFileError", "RouteDefinitionError"):
        from routesfile import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
