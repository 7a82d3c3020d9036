"""Routes file parser.

Turns the line-oriented routes DSL into validated ``RouteDefinition``
records::

    # method  path            handler
    GET       /users          app.controllers.UserController.list()
    GET       /users/:id      app.controllers.UserController.show(id: Int)
    POST      /users/:id/mail app.controllers.UserController.mail(id: Int, subject: String)

Each non-blank, non-comment line is either accepted (one record) or
rejected with a ``RouteDefinitionError``. A rejected line aborts the
whole file; no partial route list is ever returned.
"""

import re
from pathlib import Path

from routesfile.errors import (
    InvalidHandlerReference,
    InvalidMethod,
    LexicalError,
    ParameterMismatch,
    ReservedParameter,
    SourceNotFound,
)
from routesfile.model import HttpMethod, MethodParameter, PathParameter, RouteDefinition
from routesfile.naming import is_identifier

# ":name" captures inside a path pattern
PATH_CAPTURE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

# Type assumed for a capture with no same-named handler parameter
DEFAULT_PARAM_TYPE = "String"


class RoutesParser:
    """Parse routes files into route definitions.

    *context_type* is the type name of the auto-injected context
    parameter; declaring ``call: <context_type>`` in a handler is an error.
    """

    __slots__ = ("_context_type",)

    def __init__(self, context_type: str = "Call") -> None:
        self._context_type = context_type

    def parse_file(self, path: str | Path) -> list[RouteDefinition]:
        """Read *path* as UTF-8 and parse it.

        Raises ``SourceNotFound`` if the file does not exist.
        """
        source = Path(path)
        if not source.is_file():
            raise SourceNotFound(str(source))
        return self.parse(source.read_text(encoding="utf-8"))

    def parse(self, text: str) -> list[RouteDefinition]:
        """Parse the full routes source, preserving declaration order."""
        routes: list[RouteDefinition] = []
        for index, line in enumerate(text.splitlines(), start=1):
            route = self.parse_line(line, index)
            if route is not None:
                routes.append(route)
        return routes

    def parse_line(self, line: str, line_number: int) -> RouteDefinition | None:
        """Parse one line. Returns ``None`` for blank lines and comments."""
        line = line.strip()
        if not line or line.startswith("#"):
            return None

        # At most three fields: the handler keeps its internal whitespace
        fields = line.split(None, 2)
        if len(fields) < 3:
            raise LexicalError(
                f"Invalid route definition at line {line_number}: {line}",
                line_number=line_number,
                line=line,
            )
        method_token, path, handler = fields

        method = HttpMethod.parse(method_token)
        if method is None:
            raise InvalidMethod(
                f"Invalid HTTP method '{method_token}' at line {line_number}",
                line_number=line_number,
                line=line,
            )

        controller, action = self._parse_handler_ref(handler, line_number, line)
        method_parameters = self._parse_method_parameters(handler, line_number, line)
        path_parameters = _extract_path_parameters(path, method_parameters)
        _check_parameters(path_parameters, method_parameters, line_number, line)

        return RouteDefinition(
            method=method,
            path=path,
            controller=controller,
            action=action,
            path_parameters=path_parameters,
            method_parameters=method_parameters,
            line_number=line_number,
        )

    def _parse_handler_ref(self, handler: str, line_number: int, line: str) -> tuple[str, str]:
        """Split ``pkg.Controller.action(...)`` into controller and action."""
        reference = handler.split("(", 1)[0]
        parts = reference.split(".")
        if len(parts) < 2:
            raise InvalidHandlerReference(
                f"Invalid controller action format at line {line_number}: {handler}",
                line_number=line_number,
                line=line,
            )

        *controller_parts, action = parts
        controller = ".".join(controller_parts)
        if not is_identifier(action):
            raise InvalidHandlerReference(
                f"Invalid action name '{action}' at line {line_number}: "
                "must be a valid identifier",
                line_number=line_number,
                line=line,
            )
        for part in controller_parts:
            if not is_identifier(part):
                raise InvalidHandlerReference(
                    f"Invalid controller name '{controller}' at line {line_number}: "
                    f"'{part}' is not a valid identifier",
                    line_number=line_number,
                    line=line,
                )
        return controller, action

    def _parse_method_parameters(
        self, handler: str, line_number: int, line: str
    ) -> tuple[MethodParameter, ...]:
        """Parse ``(name: Type, ...)``. Entries without a ``:`` are dropped."""
        start = handler.find("(")
        end = handler.rfind(")")
        if start == -1 or end == -1 or end <= start:
            return ()

        inner = handler[start + 1 : end]
        if not inner.strip():
            return ()

        parameters: list[MethodParameter] = []
        for entry in inner.split(","):
            name, colon, type_name = entry.strip().partition(":")
            if not colon:
                continue
            parameters.append(MethodParameter(name=name.strip(), type_name=type_name.strip()))

        for param in parameters:
            if param.name == "call" and param.type_name == self._context_type:
                raise ReservedParameter(
                    f"Found 'call: {self._context_type}' parameter in controller action "
                    f"'{handler}' at line {line_number}. This parameter is auto-injected "
                    "into every action and should be omitted from the routes file.",
                    line_number=line_number,
                    line=line,
                )
        return tuple(parameters)


def _extract_path_parameters(
    path: str, method_parameters: tuple[MethodParameter, ...]
) -> tuple[PathParameter, ...]:
    """Collect ``:name`` captures, typed from the same-named handler parameter."""
    declared_types: dict[str, str] = {}
    for param in method_parameters:
        declared_types.setdefault(param.name, param.type_name)
    return tuple(
        PathParameter(name=name, type_name=declared_types.get(name, DEFAULT_PARAM_TYPE))
        for name in PATH_CAPTURE.findall(path)
    )


def _check_parameters(
    path_parameters: tuple[PathParameter, ...],
    method_parameters: tuple[MethodParameter, ...],
    line_number: int,
    line: str,
) -> None:
    """Every path capture needs a same-named handler parameter.

    The reverse is not required: handler parameters without a capture
    are read from the query string.
    """
    declared = {p.name for p in method_parameters}
    missing: dict[str, None] = {}
    for param in path_parameters:
        if param.name not in declared:
            missing.setdefault(param.name, None)
    if missing:
        names = ", ".join(f":{name}" for name in missing)
        raise ParameterMismatch(
            f"Path parameters {names} do not have corresponding method parameters "
            f"at line {line_number}: {line}",
            missing=tuple(missing),
            line_number=line_number,
            line=line,
        )


def parse_routes(text: str, *, context_type: str = "Call") -> list[RouteDefinition]:
    """Parse routes DSL *text* with a default parser."""
    return RoutesParser(context_type=context_type).parse(text)
