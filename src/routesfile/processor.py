"""Build integration — from declarations to written route modules.

A declaration names a routes file and the package the generated module
belongs to. The processor finds the file, parses it, checks handlers
against an optional registry, renders the module, and hands it to an
``ArtifactWriter``. A failing declaration is logged and skipped; it
never stops the others.

Usage::

    @generate_routes("routes")
    class Application: ...

    processor = RoutesProcessor(writer=FileArtifactWriter("src"))
    processor.process([Declaration.from_class(Application)])
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from routesfile.codegen import RoutesCodeGenerator
from routesfile.config import GeneratorConfig
from routesfile.errors import EmitError, RouteDefinitionError, SourceNotFound
from routesfile.parser import RoutesParser
from routesfile.registry import HandlerRegistry

logger = logging.getLogger("routesfile.processor")

_ROUTES_FILE_ATTR = "__routes_file__"


def generate_routes[T: type](routes_file: str = "routes") -> Callable[[T], T]:
    """Mark a class as the originating declaration of a routes module.

    The generated module is placed in the package containing the class.
    """

    def decorator(cls: T) -> T:
        setattr(cls, _ROUTES_FILE_ATTR, routes_file)
        return cls

    return decorator


@dataclass(frozen=True, slots=True)
class Declaration:
    """One request to generate a routes module.

    *origin* identifies what asked for the module; writers use it to
    track which declaration an artifact depends on.
    """

    package: str
    routes_file: str = "routes"
    origin: str | None = None

    @classmethod
    def from_class(cls, target: type) -> Declaration:
        """Build a declaration from a class marked with ``@generate_routes``."""
        routes_file = getattr(target, _ROUTES_FILE_ATTR, None)
        if routes_file is None:
            msg = f"{target.__qualname__} is not marked with @generate_routes"
            raise TypeError(msg)
        package = target.__module__.rpartition(".")[0]
        return cls(
            package=package,
            routes_file=routes_file,
            origin=f"{target.__module__}.{target.__qualname__}",
        )


@dataclass(frozen=True, slots=True)
class GeneratedArtifact:
    """A rendered routes module waiting to be persisted."""

    package: str
    module: str
    source: str
    routes_file: str
    origin: str | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.module}" if self.package else self.module

    @property
    def relative_path(self) -> Path:
        """Path of the module relative to a source root."""
        parts = self.package.split(".") if self.package else []
        return Path(*parts, f"{self.module}.py")


class ArtifactWriter(Protocol):
    """Persists generated modules.

    *aggregating* is True when the artifact depends on more than one
    declaration, which affects incremental rebuild granularity.
    """

    def write(self, artifact: GeneratedArtifact, *, aggregating: bool) -> None: ...


class FileArtifactWriter:
    """Write artifacts under a source root directory."""

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def write(self, artifact: GeneratedArtifact, *, aggregating: bool) -> None:
        target = self._root / artifact.relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(artifact.source, encoding="utf-8")


class MemoryArtifactWriter:
    """Keep artifacts in memory. Useful for tests and dry runs."""

    __slots__ = ("artifacts",)

    def __init__(self) -> None:
        self.artifacts: list[tuple[GeneratedArtifact, bool]] = []

    def write(self, artifact: GeneratedArtifact, *, aggregating: bool) -> None:
        self.artifacts.append((artifact, aggregating))


def find_routes_file(
    routes_file: str,
    root: str | Path = ".",
    search_dirs: Iterable[str] = ("resources", "."),
) -> Path:
    """Locate *routes_file* under *root*, trying each search dir in order.

    Raises ``SourceNotFound`` listing every path tried.
    """
    base = Path(root)
    tried: list[str] = []
    for directory in search_dirs:
        candidate = base / directory / routes_file
        if candidate.is_file():
            return candidate
        tried.append(str(candidate))
    raise SourceNotFound(routes_file, tuple(tried))


class RoutesProcessor:
    """Generate one routes module per declaration."""

    __slots__ = ("_config", "_generator", "_parser", "_registry", "_root", "_writer")

    def __init__(
        self,
        writer: ArtifactWriter,
        *,
        config: GeneratorConfig | None = None,
        registry: HandlerRegistry | None = None,
        root: str | Path = ".",
    ) -> None:
        self._config = config or GeneratorConfig()
        self._writer = writer
        self._registry = registry
        self._root = Path(root)
        self._parser = RoutesParser(context_type=self._config.context_type)
        self._generator = RoutesCodeGenerator(self._config)

    def process(self, declarations: Iterable[Declaration]) -> list[GeneratedArtifact]:
        """Generate and write a module for each declaration.

        Returns the artifacts that were written.
        """
        written: list[GeneratedArtifact] = []
        for declaration in declarations:
            artifact = self.generate(declaration)
            if artifact is None:
                continue
            try:
                self._writer.write(artifact, aggregating=False)
            except OSError as exc:
                logger.error(
                    "Failed to write generated module %s: %s", artifact.qualified_name, exc
                )
                continue
            logger.info("Generated routes module: %s", artifact.qualified_name)
            written.append(artifact)
        return written

    def generate(self, declaration: Declaration) -> GeneratedArtifact | None:
        """Render the module for one declaration, or ``None`` if it was skipped."""
        routes_file = declaration.routes_file or self._config.routes_file
        try:
            path = find_routes_file(routes_file, self._root, self._config.search_dirs)
        except SourceNotFound as exc:
            logger.error("%s", exc)
            return None

        logger.info("Processing routes file: %s", path)
        try:
            routes = self._parser.parse_file(path)
        except RouteDefinitionError as exc:
            logger.error("Failed to parse routes file %s: %s", path, exc)
            return None
        except (SourceNotFound, UnicodeDecodeError, OSError) as exc:
            logger.error("Failed to read routes file %s: %s", path, exc)
            return None

        if not routes:
            logger.warning("No routes found in file: %s", routes_file)
            return None

        logger.info("Found %d routes", len(routes))

        if self._registry is not None:
            problems = self._registry.check(routes)
            for problem in problems:
                logger.warning("%s: %s", path, problem)
            if problems and self._config.strict_handlers:
                logger.error("Skipping %s: %d unresolved handlers", path, len(problems))
                return None

        try:
            source = self._generator.generate(
                routes, package=declaration.package, source_name=routes_file
            )
        except EmitError as exc:
            logger.error("Failed to generate routes module from %s: %s", path, exc)
            return None

        return GeneratedArtifact(
            package=declaration.package,
            module=self._config.module_name,
            source=source,
            routes_file=routes_file,
            origin=declaration.origin,
        )
