"""Raw parameter extraction used by generated handlers."""

from routesfile.errors import BadRequest, RouteInvariantError
from routesfile.runtime.call import Call


def path_param(call: Call, name: str) -> str:
    """Return the matched value of path capture *name*.

    The route pattern guarantees the capture exists, so absence raises
    ``RouteInvariantError`` instead of a client error.
    """
    try:
        return call.path_params[name]
    except KeyError:
        msg = f"Route {call.method} {call.path!r} matched without capture {name!r}"
        raise RouteInvariantError(msg) from None


def query_param(call: Call, name: str) -> str:
    """Return the first query value for *name*; absence is a 400."""
    value = call.query.get(name)
    if value is None:
        raise BadRequest(f"Missing query parameter: {name}")
    return value
