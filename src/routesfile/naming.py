"""Deterministic names derived from route records.

Route names identify registrations; controller field names identify the
single shared instance of each controller in the generated module.
"""

import keyword
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routesfile.model import RouteDefinition

_NON_IDENTIFIER = re.compile(r"\W")


def is_identifier(name: str) -> bool:
    """Return True if *name* can be referenced from generated Python code.

    Non-empty, starts with a letter or underscore, continues with letters,
    digits, or underscores, and is not a reserved keyword.
    """
    return name.isidentifier() and not keyword.iskeyword(name)


def route_name(method: str, path: str) -> str:
    """Canonical name of a route registration.

    Examples::

        route_name("GET", "/users")                -> "get_users"
        route_name("POST", "/users/:id/activate")  -> "post_users_id_activate"
        route_name("GET", "/")                     -> "get_"
    """
    slug = path.removeprefix("/").replace("/", "_").replace(":", "").replace("-", "_")
    return f"{method.lower()}_{slug}"


def controller_field_name(qualified_name: str) -> str:
    """Name of the field holding the shared instance of a controller.

    ``"app.controllers.UserController"`` -> ``"userController"``
    """
    simple = qualified_name.rsplit(".", 1)[-1]
    return simple[:1].lower() + simple[1:]


def distinct_controllers(routes: Iterable[RouteDefinition]) -> list[str]:
    """Controller qualified names, deduplicated in first-seen order."""
    seen: dict[str, None] = {}
    for route in routes:
        seen.setdefault(route.controller, None)
    return list(seen)


def python_name(name: str) -> str:
    """Coerce an arbitrary declared name into a usable Python local.

    Valid names pass through. Keywords get a trailing underscore,
    anything else has its invalid characters replaced.
    """
    if is_identifier(name):
        return name
    if keyword.iskeyword(name):
        return f"{name}_"
    cleaned = _NON_IDENTIFIER.sub("_", name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    if keyword.iskeyword(cleaned):
        cleaned = f"{cleaned}_"
    return cleaned
