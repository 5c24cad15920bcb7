"""Catalog API routes.

Browsing, filtering and live preview of code generators.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from figscript.api.deps import get_catalog, get_factory
from figscript.api.schemas import (
    CatalogResponse,
    GeneratorResponse,
    LayerTypesResponse,
    PreviewRequest,
    PreviewResponse,
)
from figscript.catalog.models import CodeGenerator, UnknownGeneratorError
from figscript.catalog.service import CatalogService
from figscript.core.factory import ComponentFactory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _require_generator(catalog: CatalogService, generator_id: str) -> CodeGenerator:
    try:
        return catalog.require(generator_id)
    except UnknownGeneratorError as e:
        logger.warning(f"Generator not found: {generator_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=CatalogResponse)
async def list_catalog(
    q: str = Query(default="", description="Case-insensitive search on name and description"),
    types: list[str] = Query(default=[], description="Layer types; any match is enough"),
    catalog: CatalogService = Depends(get_catalog),
) -> CatalogResponse:
    """List catalog sections, optionally filtered.

    Args:
        q: Free-text search.
        types: Layer types such as FRAME or TEXT.
        catalog: Generator catalog.

    Returns:
        Sections that still hold at least one matching generator.
    """
    sections = catalog.filter(q, types)
    return CatalogResponse(
        sections=sections,
        total=sum(len(section.items) for section in sections),
    )


@router.get("/types", response_model=LayerTypesResponse)
async def list_layer_types(catalog: CatalogService = Depends(get_catalog)) -> LayerTypesResponse:
    """List every layer type generators support."""
    return LayerTypesResponse(types=catalog.layer_types())


@router.get("/{generator_id}", response_model=GeneratorResponse)
async def get_generator(
    generator_id: str,
    catalog: CatalogService = Depends(get_catalog),
) -> GeneratorResponse:
    """Get a generator with its default values.

    Raises:
        HTTPException: If the generator is not in the catalog.
    """
    generator = _require_generator(catalog, generator_id)
    return GeneratorResponse(generator=generator, default_values=catalog.default_values(generator))


@router.post("/{generator_id}/preview", response_model=PreviewResponse)
async def preview_generator(
    generator_id: str,
    payload: PreviewRequest,
    catalog: CatalogService = Depends(get_catalog),
    factory: ComponentFactory = Depends(get_factory),
) -> PreviewResponse:
    """Render a generator with the given values for live preview.

    Values override the generator defaults. Keys the generator does not
    declare are reported as problems and left out of the rendering.

    Args:
        generator_id: Catalog id of the generator.
        payload: Current form values.
        catalog: Generator catalog.
        factory: Component factory.

    Returns:
        The rendered snippet, a runnable script and any validation problems.

    Raises:
        HTTPException: If the generator is not in the catalog.
    """
    generator = _require_generator(catalog, generator_id)

    values = catalog.default_values(generator)
    values.update(payload.values)
    problems = catalog.validate_values(generator, values)

    declared = {key: value for key, value in values.items() if generator.get_input(key) is not None}
    task = catalog.to_task(generator, declared)

    return PreviewResponse(
        code=factory.get_renderer().render(task.template, task.vars),
        script=factory.get_script_assembler().build_script([task]),
        problems=problems,
        has_valid_inputs=catalog.has_valid_inputs(generator, declared),
    )
