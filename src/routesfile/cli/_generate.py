"""``routesfile generate`` — render a routes module.

Without ``--output`` the module is printed to stdout; with it, the
module is written under the given source root at the package path.
"""

import argparse
import sys

from routesfile.config import GeneratorConfig
from routesfile.processor import (
    Declaration,
    FileArtifactWriter,
    MemoryArtifactWriter,
    RoutesProcessor,
)


def run_generate(args: argparse.Namespace) -> None:
    """Generate the routes module for ``args.routes_file``.

    Exits with code 1 if the file is missing or invalid; the reason is
    logged by the processor.
    """
    config = GeneratorConfig(
        routes_file=args.routes_file,
        module_name=args.module,
        function_name=args.function,
    )
    writer = FileArtifactWriter(args.output) if args.output else MemoryArtifactWriter()
    processor = RoutesProcessor(writer, config=config, root=args.root)

    declaration = Declaration(package=args.package, routes_file=args.routes_file, origin="cli")
    written = processor.process([declaration])
    if not written:
        print(f"Error: no module generated from {args.routes_file}", file=sys.stderr)
        raise SystemExit(1)

    artifact = written[0]
    if args.output:
        print(f"Wrote {artifact.qualified_name} to {args.output}/{artifact.relative_path}")
    else:
        sys.stdout.write(artifact.source)
