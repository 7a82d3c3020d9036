"""Response value returned by ``Router.handle()``.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from dataclasses import dataclass, replace

from routesfile.errors import HTTPError


@dataclass(frozen=True, slots=True)
class Response:
    """A response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body

    @classmethod
    def from_error(cls, error: HTTPError) -> Response:
        """Build the response for an ``HTTPError``."""
        return cls(body=error.detail, status=error.status, headers=error.headers)
