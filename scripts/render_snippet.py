"""Render a catalog generator or a template file from the command line.

Usage:
    python scripts/render_snippet.py position --var x=10 --var y=20
    python scripts/render_snippet.py --template-file snippet.txt --var opacity=0.5 --wrap
    python scripts/render_snippet.py --list
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from figscript.catalog.models import CatalogError
from figscript.core.config import get_settings
from figscript.core.factory import ComponentFactory
from figscript.core.logging_config import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="render_snippet",
        description="Render a Figma code snippet from the catalog or a template file",
    )
    parser.add_argument("generator", nargs="?",
                        help="Catalog generator id (e.g. position, fill-solid)")
    parser.add_argument("--template-file", "-t", type=Path,
                        help="Render this template file instead of a catalog generator")
    parser.add_argument("--var", "-v", action="append", default=[], metavar="KEY=VALUE",
                        help="Variable binding; repeat for several")
    parser.add_argument("--syntax", choices=["mustache", "directive"],
                        help="Template syntax for --template-file (default: configured)")
    parser.add_argument("--wrap", "-w", action="store_true",
                        help="Wrap the output in the selection loop with helpers")
    parser.add_argument("--list", "-l", action="store_true",
                        help="List catalog generators and exit")
    return parser


def parse_vars(pairs: list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs into bindings.

    Raises:
        ValueError: If a pair has no ``=`` or an empty key.
    """
    bindings: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got: {pair}")
        bindings[key.strip()] = value
    return bindings


def run_cli(args: list[str]) -> int:
    """Run the CLI with given arguments. Returns exit code."""
    parser = build_parser()
    opts = parser.parse_args(args)
    factory = ComponentFactory(get_settings())

    try:
        variables = parse_vars(opts.var)

        if opts.list:
            for section in factory.get_catalog().sections:
                print(f"{section.section}:")
                for generator in section.items:
                    print(f"  {generator.id:<28} {generator.description}")
            return 0

        if opts.template_file:
            renderer = factory.get_renderer(opts.syntax)
            code = renderer.render(opts.template_file.read_text(encoding="utf-8"), variables)
            print(factory.get_script_assembler().wrap(code) if opts.wrap else code)
            return 0

        if not opts.generator:
            parser.error("a generator id, --template-file or --list is required")

        catalog = factory.get_catalog()
        generator = catalog.require(opts.generator)
        task = catalog.to_task(generator, variables)
        for problem in catalog.validate_values(generator, task.vars):
            logger.warning(problem)

        assembler = factory.get_script_assembler()
        print(assembler.build_script([task]) if opts.wrap else assembler.build_snippet(task))
        return 0

    except (ValueError, FileNotFoundError, CatalogError) as e:
        logger.error(f"Failed to render snippet: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(run_cli(sys.argv[1:]))
