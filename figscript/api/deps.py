"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- The component factory and catalog owned by the application
- Session context and the session's task queue
"""

import logging

from fastapi import Depends, Header, HTTPException, Request, status

from figscript.catalog.service import CatalogService
from figscript.core.factory import ComponentFactory
from figscript.tasks.queue import TaskQueue
from figscript.tasks.registry import QueueRegistry

logger = logging.getLogger(__name__)


def get_factory(request: Request) -> ComponentFactory:
    """Return the factory created with the application."""
    return request.app.state.factory


def get_registry(request: Request) -> QueueRegistry:
    """Return the application's session queue registry."""
    return request.app.state.registry


def get_catalog(factory: ComponentFactory = Depends(get_factory)) -> CatalogService:
    return factory.get_catalog()


async def get_session_id(
    x_session_id: str | None = Header(default=None, description="Client session owning a task queue"),
) -> str:
    """Dependency for extracting the session ID from headers.

    Args:
        x_session_id: The session ID from X-Session-ID header.

    Returns:
        The stripped session ID.

    Raises:
        HTTPException: If the header is missing or blank.
    """
    if not x_session_id or not x_session_id.strip():
        logger.warning("X-Session-ID header is missing")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Session-ID header is required",
        )
    return x_session_id.strip()


async def get_task_queue(
    session_id: str = Depends(get_session_id),
    registry: QueueRegistry = Depends(get_registry),
) -> TaskQueue:
    """Dependency for the calling session's task queue."""
    return registry.get(session_id)
