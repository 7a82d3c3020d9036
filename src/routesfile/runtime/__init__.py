"""Runtime support for generated route modules.

Generated code imports this package as ``runtime`` and uses it for
registration (``Router``), the per-request context (``Call``), raw
parameter extraction, and typed coercion::

    import routesfile.runtime as runtime

    def configure_routes(router: runtime.Router) -> None:
        @router.route("GET", "/users/{id}", name="get_users_id")
        def get_users_id(call: runtime.Call) -> object:
            id = runtime.to_int(runtime.path_param(call, "id"), "id", "Int")
            return userController.show(call, id)
"""

from routesfile.errors import (
    BadRequest,
    CoercionError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    RouteInvariantError,
)
from routesfile.runtime.call import Call
from routesfile.runtime.coercion import (
    COERCERS,
    coercer_for,
    to_boolean,
    to_double,
    to_float,
    to_int,
    to_long,
)
from routesfile.runtime.extract import path_param, query_param
from routesfile.runtime.query import QueryParams
from routesfile.runtime.response import Response
from routesfile.runtime.route import Route, RouteMatch
from routesfile.runtime.router import Router

__all__ = [
    "COERCERS",
    "BadRequest",
    "Call",
    "CoercionError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "QueryParams",
    "Response",
    "Route",
    "RouteInvariantError",
    "RouteMatch",
    "Router",
    "coercer_for",
    "path_param",
    "query_param",
    "to_boolean",
    "to_double",
    "to_float",
    "to_int",
    "to_long",
]
