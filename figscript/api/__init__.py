"""FastAPI routers and dependencies."""

from figscript.api.catalog import router as catalog_router
from figscript.api.deps import get_catalog, get_factory, get_registry, get_session_id, get_task_queue
from figscript.api.render import router as render_router
from figscript.api.tasks import router as tasks_router

__all__ = [
    "get_catalog",
    "get_factory",
    "get_registry",
    "get_session_id",
    "get_task_queue",
    "catalog_router",
    "render_router",
    "tasks_router",
]
