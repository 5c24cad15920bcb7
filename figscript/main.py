"""FastAPI application entry point.

Main application setup with middleware, routing, and lifecycle management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from figscript.api.catalog import router as catalog_router
from figscript.api.render import router as render_router
from figscript.api.schemas import ErrorResponse
from figscript.api.tasks import router as tasks_router
from figscript.catalog.models import CatalogError
from figscript.core.config import Settings, get_settings
from figscript.core.factory import ComponentFactory
from figscript.core.logging_config import setup_logging
from figscript.tasks.registry import QueueRegistry

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Loads the catalog on startup so a broken catalog fails fast, and
    drops every session queue on shutdown.
    """
    factory: ComponentFactory = app.state.factory

    # Startup
    logger.info("Starting Figma snippet API...")
    try:
        catalog = factory.get_catalog()
        logger.info(f"Catalog ready: {len(catalog)} generators")
    except (FileNotFoundError, CatalogError) as e:
        logger.error(f"Failed to load catalog: {e}", exc_info=True)
        raise

    yield

    # Shutdown
    logger.info("Shutting down Figma snippet API...")
    app.state.registry.clear()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Figma Snippet Generator",
        description="Conditional code templates, catalog browsing and per-session task queues",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Store shared components in app state
    factory = ComponentFactory(settings)
    app.state.settings = settings
    app.state.factory = factory
    app.state.registry = QueueRegistry(factory.create_task_queue, max_sessions=settings.max_sessions)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(render_router)
    app.include_router(catalog_router)
    app.include_router(tasks_router)
    logger.info("Registered render, catalog and tasks routers")

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "service": "figscript-api",
            "version": VERSION,
            "template_syntax": settings.template_syntax,
        }

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        """Handle Pydantic validation errors."""
        logger.warning(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder(
                {
                    "detail": "Validation error",
                    "errors": exc.errors(),
                }
            ),
        )

    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(request, exc):
        """Handle catalog errors that escaped the routers."""
        logger.error(f"Catalog error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(detail=str(exc), error_code="CATALOG_ERROR").model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                detail="Internal server error",
                error_code="INTERNAL_ERROR",
            ).model_dump(),
        )

    logger.info("FastAPI application created successfully")
    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting uvicorn server on {settings.host}:{settings.port}...")
    uvicorn.run(
        "figscript.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
