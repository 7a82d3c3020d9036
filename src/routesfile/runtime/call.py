"""The ambient request/response context passed first to every action."""

from dataclasses import dataclass, field

from routesfile.runtime.query import QueryParams
from routesfile.runtime.response import Response


@dataclass(slots=True)
class Call:
    """One dispatched request and the response being built for it.

    Request metadata is fixed at creation. ``response`` starts as an
    empty 200 and may be replaced by the action through ``respond()``.
    """

    method: str
    path: str
    query: QueryParams = field(default_factory=QueryParams)
    path_params: dict[str, str] = field(default_factory=dict)
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""
    response: Response = field(default_factory=Response)

    def header(self, name: str) -> str | None:
        """Return the first request header named *name* (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    def respond(
        self,
        body: str | bytes = "",
        *,
        status: int = 200,
        content_type: str | None = None,
    ) -> Response:
        """Replace the pending response and return it."""
        response = Response(body=body, status=status)
        if content_type is not None:
            response = response.with_content_type(content_type)
        self.response = response
        return response
