"""Code generator: validated route list -> Python registration module.

The generated module holds one shared instance per distinct controller
and a single public function that registers every route on a
``routesfile.runtime.Router``::

    # Generated code from routes file: routes
    # Do not edit manually!
    from app.controllers import UserController

    import routesfile.runtime as runtime

    __all__ = ["configure_routes"]

    userController = UserController()


    def configure_routes(router: runtime.Router) -> None:
        @router.route("GET", "/users/{id}", name="get_users_id")
        def get_users_id(call: runtime.Call) -> object:
            id = runtime.to_int(runtime.path_param(call, "id"), "id", "Int")
            return userController.show(call, id)

Output is deterministic: the same route list always renders to the
same text.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass

from kida import Environment

from routesfile.codegen._templates import MODULE_PY, ROUTE_PY
from routesfile.config import GeneratorConfig
from routesfile.errors import EmitError
from routesfile.model import RouteDefinition
from routesfile.naming import controller_field_name, distinct_controllers, python_name
from routesfile.parser import PATH_CAPTURE
from routesfile.runtime.coercion import coercer_for

# Name the generated module binds the runtime package to
RUNTIME_ALIAS = "runtime"
# Name of the context argument of every generated handler
CONTEXT_ARG = "call"

_STATEMENT_INDENT = " " * 8


@dataclass(frozen=True, slots=True)
class ControllerField:
    """One shared controller instance in the generated module."""

    qualified_name: str
    module: str
    class_name: str
    field_name: str


def _literal(value: str) -> str:
    """Render *value* as a double-quoted Python string literal."""
    return json.dumps(value, ensure_ascii=False)


def to_dispatcher_path(path: str) -> str:
    """Rewrite ``:name`` captures into the router's ``{name}`` syntax."""
    return PATH_CAPTURE.sub(r"{\1}", path)


class RoutesCodeGenerator:
    """Render route lists into Python modules.

    One instance may be reused for any number of route lists; it holds
    no per-compilation state.
    """

    __slots__ = ("_config", "_module_template", "_route_template")

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self._config = config or GeneratorConfig()
        env = Environment(autoescape=False)
        self._module_template = env.from_string(MODULE_PY)
        self._route_template = env.from_string(ROUTE_PY)

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def controller_fields(
        self, routes: Sequence[RouteDefinition], package: str = ""
    ) -> list[ControllerField]:
        """Resolve one field per distinct controller, first-seen order.

        Bare controller names resolve against *package*. Raises
        ``EmitError`` when two controllers would share a field name or a
        bare name has no package to resolve against.
        """
        reserved = {RUNTIME_ALIAS, "router", self._config.function_name}
        fields: list[ControllerField] = []
        owners: dict[str, str] = {}

        for qualified in distinct_controllers(routes):
            module, _, class_name = qualified.rpartition(".")
            if not module:
                if not package:
                    msg = (
                        f"Controller {qualified!r} has no module and no target "
                        "package was given to resolve it against."
                    )
                    raise EmitError(msg)
                module = package

            field_name = controller_field_name(qualified)
            if field_name in reserved:
                msg = f"Controller {qualified!r} would shadow generated name {field_name!r}."
                raise EmitError(msg)
            if field_name in owners:
                msg = (
                    f"Controllers {owners[field_name]!r} and {qualified!r} "
                    f"would share the field name {field_name!r}."
                )
                raise EmitError(msg)
            owners[field_name] = qualified
            fields.append(
                ControllerField(
                    qualified_name=qualified,
                    module=module,
                    class_name=class_name,
                    field_name=field_name,
                )
            )
        return fields

    def generate(
        self,
        routes: Sequence[RouteDefinition],
        *,
        package: str = "",
        source_name: str | None = None,
    ) -> str:
        """Render the registration module for *routes*."""
        fields = self.controller_fields(routes, package)
        field_names = {f.qualified_name: f.field_name for f in fields}
        taken = {RUNTIME_ALIAS, CONTEXT_ARG, *field_names.values()}

        blocks = [
            self._render_route(route, field_names[route.controller], taken) for route in routes
        ]

        source = self._module_template.render(
            {
                "source_name": " ".join((source_name or self._config.routes_file).splitlines()),
                "imports": self._render_imports(fields),
                "function_literal": _literal(self._config.function_name),
                "fields": "\n".join(f"{f.field_name} = {f.class_name}()" for f in fields),
                "function_name": self._config.function_name,
                "routes": "\n\n".join(blocks),
            }
        )
        return str(source).rstrip() + "\n"

    def _render_imports(self, fields: list[ControllerField]) -> str:
        by_module: dict[str, list[str]] = {}
        for f in fields:
            by_module.setdefault(f.module, []).append(f.class_name)

        lines = [f"from {module} import {', '.join(names)}" for module, names in by_module.items()]
        runtime_import = f"import {self._config.runtime_module} as {RUNTIME_ALIAS}"
        if lines:
            return "\n".join(lines) + "\n\n" + runtime_import
        return runtime_import

    def _render_route(self, route: RouteDefinition, field_name: str, taken: set[str]) -> str:
        statements: list[str] = []
        arguments: list[str] = [CONTEXT_ARG]
        # Locals bound so far in this handler
        bound = set(taken)

        for param in route.path_parameters:
            local = _local_name(param.name, bound)
            raw = f"{RUNTIME_ALIAS}.path_param({CONTEXT_ARG}, {_literal(param.name)})"
            statements.append(f"{local} = {_coerced(raw, param.name, param.type_name)}")
            arguments.append(local)

        for param in route.query_parameters:
            local = _local_name(param.name, bound)
            raw = f"{RUNTIME_ALIAS}.query_param({CONTEXT_ARG}, {_literal(param.name)})"
            statements.append(f"{local} = {_coerced(raw, param.name, param.type_name)}")
            arguments.append(local)

        statements.append(f"return {field_name}.{route.action}({', '.join(arguments)})")

        return self._route_template.render(
            {
                "line_number": route.line_number,
                "handler_ref": route.handler_ref,
                "method_literal": _literal(route.method.value),
                "path_literal": _literal(to_dispatcher_path(route.path)),
                "name_literal": _literal(route.route_name),
                "function": python_name(route.route_name),
                "context_arg": CONTEXT_ARG,
                "statements": "\n".join(_STATEMENT_INDENT + s for s in statements),
            }
        )


def _local_name(name: str, bound: set[str]) -> str:
    """Pick a local for *name* that is not yet in *bound*, and reserve it."""
    local = python_name(name)
    while local in bound:
        local = f"{local}_"
    bound.add(local)
    return local


def _coerced(raw: str, name: str, type_name: str) -> str:
    """Wrap a raw extraction expression in the coercer for *type_name*."""
    coercer = coercer_for(type_name)
    if coercer is None:
        return raw
    return f"{RUNTIME_ALIAS}.{coercer.__name__}({raw}, {_literal(name)}, {_literal(type_name)})"


def generate_routes_module(
    routes: Sequence[RouteDefinition],
    *,
    package: str = "",
    source_name: str | None = None,
    config: GeneratorConfig | None = None,
) -> str:
    """Render *routes* with a default ``RoutesCodeGenerator``."""
    return RoutesCodeGenerator(config).generate(routes, package=package, source_name=source_name)
