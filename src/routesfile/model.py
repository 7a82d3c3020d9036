"""Route records produced by the parser and consumed by the code generator.

All records are frozen dataclasses: built once per source line, never
mutated, and discarded when the compilation pass ends.
"""

from dataclasses import dataclass
from enum import StrEnum

from routesfile.naming import controller_field_name, route_name


class HttpMethod(StrEnum):
    """The closed set of HTTP methods a routes file may declare."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, token: str) -> HttpMethod | None:
        """Return the method for *token* (case-insensitive), or ``None``."""
        try:
            return cls(token.upper())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class PathParameter:
    """One ``:name`` capture in a path pattern."""

    name: str
    type_name: str


@dataclass(frozen=True, slots=True)
class MethodParameter:
    """One declared handler parameter, in source order."""

    name: str
    type_name: str


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A validated route declaration.

    Every path capture has a same-named method parameter, and
    ``controller``/``action`` are valid identifiers.  ``line_number``
    is kept for diagnostics only.
    """

    method: HttpMethod
    path: str
    controller: str
    action: str
    path_parameters: tuple[PathParameter, ...] = ()
    method_parameters: tuple[MethodParameter, ...] = ()
    line_number: int = 1

    @property
    def handler_ref(self) -> str:
        """Fully qualified ``controller.action`` reference."""
        return f"{self.controller}.{self.action}"

    @property
    def route_name(self) -> str:
        return route_name(self.method, self.path)

    @property
    def controller_field(self) -> str:
        return controller_field_name(self.controller)

    @property
    def query_parameters(self) -> tuple[MethodParameter, ...]:
        """Method parameters that are not bound from the path, in declared order."""
        captured = {p.name for p in self.path_parameters}
        return tuple(p for p in self.method_parameters if p.name not in captured)
