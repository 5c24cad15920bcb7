"""Catalog loading.

Reads a JSON catalog file, validates it with Pydantic and checks it for
consistency with the renderer and the available JS helpers.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from figscript.catalog.models import CatalogDocument, CatalogError
from figscript.catalog.service import CatalogService
from figscript.interfaces.template import BaseTemplateRenderer
from figscript.script.helpers import HELPERS

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).parent / "data" / "catalog.json"


def load_catalog(
    path: Path | None = None,
    renderer: BaseTemplateRenderer | None = None,
) -> CatalogService:
    """Load and validate a catalog file.

    Args:
        path: Catalog JSON file. If None, uses the bundled catalog.
        renderer: Renderer the templates will be rendered with. When given,
            its syntax must match the catalog's and template variables are
            checked against declared inputs.

    Returns:
        A CatalogService over the loaded sections.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
        CatalogError: If the file is malformed or inconsistent.
    """
    path = path or BUNDLED_CATALOG
    logger.info(f"Loading catalog: {path}")

    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    try:
        document = CatalogDocument.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog {path}: {e}") from e

    if renderer is not None and document.syntax != renderer.syntax_name:
        raise CatalogError(
            f"Catalog {path} uses '{document.syntax}' templates but the renderer "
            f"parses '{renderer.syntax_name}'"
        )

    seen: set[str] = set()
    for section in document.sections:
        for generator in section.items:
            if generator.id in seen:
                raise CatalogError(f"Duplicate generator id in catalog: {generator.id}")
            seen.add(generator.id)

            missing = [helper.name for helper in generator.helpers if helper.name not in HELPERS]
            if missing:
                raise CatalogError(f"Generator {generator.id} needs unknown helpers: {', '.join(missing)}")

            if renderer is not None:
                declared = {field.key for field in generator.inputs}
                undeclared = renderer.variables(generator.code_template) - declared
                if undeclared:
                    logger.warning(
                        f"Generator {generator.id} template uses undeclared variables: "
                        f"{', '.join(sorted(undeclared))}"
                    )

    catalog = CatalogService(document.sections)
    logger.info(f"Catalog loaded: {len(catalog)} generators in {len(document.sections)} sections")
    return catalog
