"""Kida templates for generated route modules.

Line blocks (imports, fields, statements) are assembled in Python and
substituted here, so the templates only fix the overall layout.
"""

# ---------------------------------------------------------------------------
# Whole module
# ---------------------------------------------------------------------------

MODULE_PY = '''\
# Generated code from routes file: {{ source_name }}
# Do not edit manually!
"""Route registrations generated from a routes file."""

{{ imports }}

__all__ = [{{ function_literal }}]

{{ fields }}


def {{ function_name }}(router: runtime.Router) -> None:
    """Register every declared route on *router*, in declaration order."""

{{ routes }}
'''

# ---------------------------------------------------------------------------
# One registration inside the configure function
# ---------------------------------------------------------------------------

ROUTE_PY = """\
    # line {{ line_number }}: {{ handler_ref }}
    @router.route({{ method_literal }}, {{ path_literal }}, name={{ name_literal }})
    def {{ function }}({{ context_arg }}: runtime.Call) -> object:
{{ statements }}"""
