"""Template rendering API routes.

Stateless preview of ad-hoc templates, bare or wrapped into a script.
"""

import logging

from fastapi import APIRouter, Depends

from figscript.api.deps import get_factory
from figscript.api.schemas import RenderRequest, RenderResponse, ScriptResponse
from figscript.core.factory import ComponentFactory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/render", tags=["render"])


@router.post("", response_model=RenderResponse)
async def render_template(
    payload: RenderRequest,
    factory: ComponentFactory = Depends(get_factory),
) -> RenderResponse:
    """Render a template with the given variables.

    Args:
        payload: Template, bindings and optional syntax preset.
        factory: Component factory.

    Returns:
        The rendered code and the variable names the template uses.
    """
    renderer = factory.get_renderer(payload.syntax)
    code = renderer.render(payload.template, payload.variables)
    logger.debug(f"Rendered template ({renderer.syntax_name}): {len(code)} chars")
    return RenderResponse(code=code, variables=sorted(renderer.variables(payload.template)))


@router.post("/script", response_model=ScriptResponse)
async def render_script(
    payload: RenderRequest,
    factory: ComponentFactory = Depends(get_factory),
) -> ScriptResponse:
    """Render a template and wrap it in the selection loop."""
    renderer = factory.get_renderer(payload.syntax)
    code = renderer.render(payload.template, payload.variables)
    return ScriptResponse(code=code, script=factory.get_script_assembler().wrap(code))
