"""Route, RouteMatch, and PathSegment frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:   ``/users``      (is_param=False)
    Capture:  ``/{id}``       (is_param=True, param_names=("id",))
    Embedded: ``/{id}.json``  (is_param=True, param_names=("id",), pattern matches "42.json")
    """

    value: str
    is_param: bool = False
    param_names: tuple[str, ...] = ()
    pattern: str = ""


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created by the generated registration code, compiled into the router.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
