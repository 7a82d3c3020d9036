"""Generator configuration.

GeneratorConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Routes generator configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = GeneratorConfig(routes_file="conf/routes", strict_handlers=True)
    """

    # Source discovery
    routes_file: str = "routes"
    # Tried in order, relative to the project root
    search_dirs: tuple[str, ...] = ("resources", ".")

    # Generated module
    module_name: str = "generated_routes"
    function_name: str = "configure_routes"
    runtime_module: str = "routesfile.runtime"

    # Name of the auto-injected request/response context type
    context_type: str = "Call"

    # Skip generation when the handler registry cannot resolve a controller
    strict_handlers: bool = False
