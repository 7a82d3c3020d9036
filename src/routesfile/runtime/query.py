"""Query string values as seen by generated handlers."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Read-only view of a query string.

    A key repeated in the query string keeps its first value, which is
    the value ``query_param`` hands to an action. Blank values
    (``?flag=``) are present as ``""``.
    """

    __slots__ = ("_values",)

    def __init__(self, query_string: str = "") -> None:
        values: dict[str, str] = {}
        for key, value in parse_qsl(query_string, keep_blank_values=True):
            values.setdefault(key, value)
        self._values = MappingProxyType(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"QueryParams({dict(self._values)!r})"
