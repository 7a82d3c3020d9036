"""Compiled router with trie-based path matching.

Generated registration code adds routes during setup; the router is
compiled into an immutable lookup structure before the first request.
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import unquote

from routesfile.errors import ConfigurationError, HTTPError, MethodNotAllowed, NotFound
from routesfile.runtime.call import Call
from routesfile.runtime.query import QueryParams
from routesfile.runtime.response import Response
from routesfile.runtime.route import PathSegment, Route, RouteMatch

logger = logging.getLogger("routesfile.runtime")

_CAPTURE = re.compile(r"\{([^{}]*)\}")
_CAPTURE_VALUE = r"([^/]+?)"


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/files/{id}.txt" -> [PathSegment("files"), PathSegment("{id}.txt", is_param=True, ...)]

    Raises ``ConfigurationError`` for unbalanced braces or capture names
    that are not identifiers.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        names: list[str] = []
        pattern: list[str] = []
        position = 0
        for found in _CAPTURE.finditer(part):
            name = found.group(1)
            if not name.isidentifier():
                msg = f"Invalid capture {found.group(0)!r} in route path {path!r}."
                raise ConfigurationError(msg)
            pattern.append(re.escape(part[position : found.start()]))
            pattern.append(_CAPTURE_VALUE)
            names.append(name)
            position = found.end()
        remainder = part[position:]
        static_text = _CAPTURE.sub("", part)
        if "{" in static_text or "}" in static_text:
            msg = f"Unbalanced braces in route path {path!r}."
            raise ConfigurationError(msg)
        if not names:
            segments.append(PathSegment(value=part))
            continue
        pattern.append(re.escape(remainder))
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_names=tuple(names),
                pattern="".join(pattern),
            )
        )
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("children", "param_children", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Capture segment children, keyed by their name-independent pattern
        self.param_children: dict[str, _ParamEdge] = {}
        # Routes at this node, keyed by HTTP method, with their capture names
        self.routes_by_method: dict[str, tuple[Route, tuple[str, ...]]] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A capture edge in the trie."""

    regex: re.Pattern[str]
    node: _TrieNode


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/users", handler, frozenset({"GET"})))
        router.add(Route("/users/{id}", handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/users/42")

    When two routes share a method and pattern, the later registration
    replaces the earlier one in the trie.
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)

        segments = parse_path(route.path)
        names: list[str] = []
        node = self._root

        for seg in segments:
            if seg.is_param:
                edge = node.param_children.get(seg.pattern)
                if edge is None:
                    edge = _ParamEdge(regex=re.compile(seg.pattern), node=_TrieNode())
                    node.param_children[seg.pattern] = edge
                names.extend(seg.param_names)
                node = edge.node
            else:
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        for method in route.methods:
            node.routes_by_method[method] = (route, tuple(names))
        self._routes.append(route)

    def route(
        self,
        methods: str | Iterable[str],
        path: str,
        *,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of ``add()``.

        Usage::

            @router.route("GET", "/users/{id}", name="get_users_id")
            def get_users_id(call):
                ...
        """
        method_set = frozenset([methods] if isinstance(methods, str) else methods)

        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            self.add(Route(path=path, handler=handler, methods=method_set, name=name))
            return handler

        return decorator

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [unquote(p) for p in path.strip("/").split("/") if p]
        allowed: set[str] = set()
        result = self._match_node(self._root, parts, 0, (), method, allowed)

        if result is None:
            if allowed:
                raise MethodNotAllowed(frozenset(allowed))
            raise NotFound(f"No route matches {method} {path!r}")

        (route, names), values = result
        return RouteMatch(route=route, path_params=dict(zip(names, values, strict=True)))

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        values: tuple[str, ...],
        method: str,
        allowed: set[str],
    ) -> tuple[tuple[Route, tuple[str, ...]], tuple[str, ...]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed: this node must carry the method
        if index == len(parts):
            entry = node.routes_by_method.get(method)
            if entry is not None:
                return entry, values
            allowed.update(node.routes_by_method)
            return None

        part = parts[index]

        # 1. Try static child first (exact match)
        if part in node.children:
            result = self._match_node(
                node.children[part], parts, index + 1, values, method, allowed
            )
            if result is not None:
                return result

        # 2. Try capture children in registration order
        for edge in node.param_children.values():
            found = edge.regex.fullmatch(part)
            if found is not None:
                result = self._match_node(
                    edge.node, parts, index + 1, values + found.groups(), method, allowed
                )
                if result is not None:
                    return result

        return None

    def handle(
        self,
        method: str,
        target: str,
        *,
        headers: tuple[tuple[str, str], ...] = (),
        body: bytes = b"",
    ) -> Response:
        """Dispatch one request and return its response.

        *target* is the request path with an optional query string.
        ``HTTPError`` raised while matching or inside the handler
        (missing or malformed parameters included) becomes an error
        response; any other exception propagates.
        """
        if not self._compiled:
            self.compile()

        path, _, query_string = target.partition("?")
        try:
            match = self.match(method, path)
        except HTTPError as exc:
            logger.debug("%s %s -> %d", method, path, exc.status)
            return Response.from_error(exc)

        call = Call(
            method=method,
            path=path,
            query=QueryParams(query_string),
            path_params=match.path_params,
            headers=headers,
            body=body,
        )
        try:
            result = match.route.handler(call)
        except HTTPError as exc:
            logger.info("%s %s -> %d: %s", method, path, exc.status, exc.detail)
            return Response.from_error(exc)

        return _to_response(call, result)


def _to_response(call: Call, result: object) -> Response:
    """Normalize a handler return value into a Response."""
    if isinstance(result, Response):
        return result
    if result is None:
        return call.response
    if isinstance(result, (str, bytes)):
        return replace(call.response, body=result)
    return replace(call.response, body=str(result))
