"""routesfile exception hierarchy.

Shared across the parser, code generator, processor, and the runtime
dispatcher so every module raises and catches the same types.
"""

from dataclasses import dataclass


class RoutesFileError(Exception):
    """Base for all routesfile-specific errors."""


class ConfigurationError(RoutesFileError):
    """Raised when a runtime registration is invalid.

    Raised by ``Router.add()`` for malformed capture patterns or when
    routes are added after the router was compiled.
    """


# ---------------------------------------------------------------------------
# Routes file diagnostics
# ---------------------------------------------------------------------------


class RouteDefinitionError(RoutesFileError):
    """A line of the routes file could not be turned into a route.

    Always fatal to the whole file: the parser never returns a partial
    route list.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class LexicalError(RouteDefinitionError):
    """Line has fewer than three whitespace-delimited fields."""


class InvalidMethod(RouteDefinitionError):  # noqa: N818
    """First field is not one of the supported HTTP methods."""


class InvalidHandlerReference(RouteDefinitionError):  # noqa: N818
    """Handler reference is not ``controller.action(...)`` with valid identifiers."""


class ReservedParameter(RouteDefinitionError):  # noqa: N818
    """Handler declares the auto-injected context parameter explicitly."""


class ParameterMismatch(RouteDefinitionError):  # noqa: N818
    """One or more path captures have no same-named handler parameter."""

    def __init__(
        self,
        message: str,
        *,
        missing: tuple[str, ...] = (),
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        super().__init__(message, line_number=line_number, line=line)
        self.missing = missing


class SourceNotFound(RoutesFileError):  # noqa: N818
    """The routes file could not be located.

    The processor logs this and skips the declaration; other
    declarations are still generated.
    """

    def __init__(self, routes_file: str, tried: tuple[str, ...] = ()) -> None:
        self.routes_file = routes_file
        self.tried = tried
        detail = f"Routes file not found: {routes_file}"
        if tried:
            detail += f" (tried: {', '.join(tried)})"
        super().__init__(detail)


class EmitError(RoutesFileError):
    """A validated route list cannot be expressed as a Python module."""


# ---------------------------------------------------------------------------
# Runtime errors raised by generated code and the dispatcher
# ---------------------------------------------------------------------------


class RouteInvariantError(RoutesFileError):
    """A path capture promised by the route pattern was not matched.

    Indicates the dispatcher and the generated code disagree about a
    pattern. Never a client error.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RoutesFileError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by generated handlers. ``Router.handle()``
    catches these and turns them into error responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400 — the request is missing or carries a malformed parameter."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class CoercionError(BadRequest):
    """400 — a path or query value does not parse as its declared type."""

    def __init__(self, param: str, declared_type: str, value: str) -> None:
        super().__init__(f"Invalid {declared_type} value for parameter {param!r}: {value!r}")
        object.__setattr__(self, "param", param)
        object.__setattr__(self, "declared_type", declared_type)
        object.__setattr__(self, "value", value)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
