"""Handler registry — explicit map from controller names to classes.

Used by the processor to warn about routes whose controller or action
does not exist. Purely advisory: generated code imports controllers
statically and never consults the registry.

Usage::

    handlers = HandlerRegistry()

    @handlers.register
    class UserController:
        def show(self, call, id): ...

    problems = handlers.check(routes)
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import overload

from routesfile.model import RouteDefinition


@dataclass(frozen=True, slots=True)
class HandlerProblem:
    """A route whose handler could not be resolved."""

    route: RouteDefinition
    message: str

    def __str__(self) -> str:
        return f"line {self.route.line_number}: {self.message}"


class HandlerRegistry:
    """Qualified controller name -> controller class.

    Classes register under ``module.QualName`` by default, matching how
    routes files reference them.
    """

    __slots__ = ("_handlers",)

    def __init__(self, handlers: Iterable[type] = ()) -> None:
        self._handlers: dict[str, type] = {}
        for cls in handlers:
            self.register(cls)

    @overload
    def register(self, cls: type, *, name: str | None = None) -> type: ...

    @overload
    def register(self, cls: None = None, *, name: str | None = None) -> Callable[[type], type]: ...

    def register(
        self, cls: type | None = None, *, name: str | None = None
    ) -> type | Callable[[type], type]:
        """Register a controller class. Usable bare or as ``@register(name=...)``."""

        def decorator(target: type) -> type:
            key = name or f"{target.__module__}.{target.__qualname__}"
            self._handlers[key] = target
            return target

        if cls is None:
            return decorator
        return decorator(cls)

    def get(self, name: str) -> type | None:
        """Look up a controller by qualified name. Returns ``None`` if not found."""
        return self._handlers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def check(self, routes: Iterable[RouteDefinition]) -> list[HandlerProblem]:
        """Report routes whose controller or action is unknown, in route order."""
        problems: list[HandlerProblem] = []
        for route in routes:
            cls = self._handlers.get(route.controller)
            if cls is None:
                problems.append(
                    HandlerProblem(route, f"Controller class not found: {route.controller}")
                )
                continue
            if not callable(getattr(cls, route.action, None)):
                problems.append(
                    HandlerProblem(
                        route,
                        f"Controller {route.controller} has no action {route.action!r}",
                    )
                )
        return problems
