"""Task queue API routes.

Each client session (X-Session-ID header) owns one in-memory queue.
Handlers are async and never await while mutating a queue, so all
mutations run serialized on the event loop.
"""

import logging
from collections.abc import Mapping

from fastapi import APIRouter, Depends, HTTPException, status

from figscript.api.deps import get_catalog, get_factory, get_task_queue
from figscript.api.schemas import (
    MergedScriptResponse,
    ReorderRequest,
    TaskChangeResponse,
    TaskCreateRequest,
    TaskListResponse,
    UpdateVarsRequest,
)
from figscript.catalog.models import InvalidInputError, UnknownGeneratorError
from figscript.catalog.service import CatalogService
from figscript.core.factory import ComponentFactory
from figscript.interfaces.template import BaseTemplateRenderer
from figscript.tasks.models import TaskItem
from figscript.tasks.queue import TaskQueue

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _check_bindings(renderer: BaseTemplateRenderer, template: str, bindings: Mapping[str, str]) -> None:
    """Reject binding keys the template never references."""
    unused = sorted(set(bindings) - renderer.variables(template))
    if unused:
        logger.warning(f"Rejected bindings not used by the template: {unused}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[f"Unused variable: {key}" for key in unused],
        )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=TaskListResponse)
async def list_tasks(queue: TaskQueue = Depends(get_task_queue)) -> TaskListResponse:
    """List the session's queued tasks in order."""
    items = list(queue.items)
    return TaskListResponse(items=items, count=len(items))


@router.post("", response_model=TaskChangeResponse)
async def add_task_from_generator(
    payload: TaskCreateRequest,
    queue: TaskQueue = Depends(get_task_queue),
    catalog: CatalogService = Depends(get_catalog),
) -> TaskChangeResponse:
    """Snapshot a catalog generator and its values into the queue.

    Adding a generator that is already queued is a no-op; the queued
    values are kept.

    Args:
        payload: Generator id and value overrides.
        queue: The session's task queue.
        catalog: Generator catalog.

    Returns:
        Whether the queue changed and its new length.

    Raises:
        HTTPException: 404 for an unknown generator, 422 for values the
            generator does not accept.
    """
    try:
        generator = catalog.require(payload.generator_id)
        task = catalog.to_task(generator, payload.values)
    except UnknownGeneratorError as e:
        logger.warning(f"Cannot queue unknown generator: {payload.generator_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except InvalidInputError as e:
        logger.warning(f"Rejected values for {payload.generator_id}: {e.problems}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.problems) from e

    if not catalog.has_valid_inputs(generator, task.vars):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{generator.name} needs at least one value",
        )

    changed = queue.add(task)
    logger.info(f"Queued {task.id}: changed={changed}, count={len(queue)}")
    return TaskChangeResponse(changed=changed, count=len(queue))


@router.post("/items", response_model=TaskChangeResponse)
async def add_task_item(
    item: TaskItem,
    queue: TaskQueue = Depends(get_task_queue),
    factory: ComponentFactory = Depends(get_factory),
) -> TaskChangeResponse:
    """Add a raw task item; a no-op if its id is already queued.

    Raises:
        HTTPException: If a binding key is not used by the item's template.
    """
    _check_bindings(factory.get_renderer(), item.template, item.vars)
    changed = queue.add(item)
    return TaskChangeResponse(changed=changed, count=len(queue))


@router.post("/reorder", response_model=TaskChangeResponse)
async def reorder_tasks(
    payload: ReorderRequest,
    queue: TaskQueue = Depends(get_task_queue),
) -> TaskChangeResponse:
    """Move a task to a new position.

    ``to_index`` addresses the queue after the task has been taken out.

    Raises:
        HTTPException: If either index is out of range.
    """
    size = len(queue)
    if not (0 <= payload.from_index < size and 0 <= payload.to_index < size):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Indices must be in range 0..{size - 1}" if size else "Queue is empty",
        )
    queue.reorder(payload.from_index, payload.to_index)
    return TaskChangeResponse(changed=payload.from_index != payload.to_index, count=size)


@router.get("/merged", response_model=MergedScriptResponse)
async def get_merged_script(
    queue: TaskQueue = Depends(get_task_queue),
    factory: ComponentFactory = Depends(get_factory),
) -> MergedScriptResponse:
    """Render every queued task and merge the results.

    Returns:
        The bare merged body and the runnable script with helpers.
    """
    return MergedScriptResponse(
        body=queue.render_merged(),
        script=factory.get_script_assembler().build_script(queue.items),
        count=len(queue),
    )


@router.put("/{task_id}/vars", response_model=TaskChangeResponse)
async def update_task_vars(
    task_id: str,
    payload: UpdateVarsRequest,
    queue: TaskQueue = Depends(get_task_queue),
    factory: ComponentFactory = Depends(get_factory),
) -> TaskChangeResponse:
    """Replace a queued task's bindings; a no-op if it is not queued.

    Raises:
        HTTPException: If a binding key is not used by the task's template.
    """
    task = queue.get(task_id)
    if task is None:
        return TaskChangeResponse(changed=False, count=len(queue))
    _check_bindings(factory.get_renderer(), task.template, payload.vars)
    changed = queue.update_vars(task_id, payload.vars)
    return TaskChangeResponse(changed=changed, count=len(queue))


@router.delete("/{task_id}", response_model=TaskChangeResponse)
async def remove_task(
    task_id: str,
    queue: TaskQueue = Depends(get_task_queue),
) -> TaskChangeResponse:
    """Remove a queued task; a no-op if it is not queued."""
    changed = queue.remove(task_id)
    return TaskChangeResponse(changed=changed, count=len(queue))


@router.delete("", response_model=TaskChangeResponse)
async def clear_tasks(queue: TaskQueue = Depends(get_task_queue)) -> TaskChangeResponse:
    """Remove every task from the session's queue."""
    changed = len(queue) > 0
    queue.clear()
    return TaskChangeResponse(changed=changed, count=0)
