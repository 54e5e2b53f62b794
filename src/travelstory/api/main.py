"""FastAPI application entry point.

Main application configuration, middleware, static mounts and startup
lifecycle.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from travelstory.core.config import Settings, get_settings
from travelstory.core.security import TokenService
from travelstory.models.database import Database
from travelstory.services.images import ImageStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Initialize database connection pool
    - Create tables when configured to

    Shutdown:
    - Close database connections
    """
    settings: Settings = app.state.settings

    logger.info("Initializing database connection...")
    engine_kwargs = {}
    if settings.uses_connection_pool:
        engine_kwargs = {
            "pool_size": settings.database_pool_size,
            "max_overflow": settings.database_max_overflow,
        }
    app.state.database = Database(settings.async_database_url, **engine_kwargs)
    if settings.auto_create_tables:
        await app.state.database.create_all()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.database.close()
    logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration to build the app from; defaults to the
            environment-backed settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    is_production = settings.environment == "production"

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Personal travel journal: accounts, stories and images",
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs" if not is_production else None,
        redoc_url="/redoc" if not is_production else None,
        openapi_url="/openapi.json" if not is_production else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.image_store = ImageStore(Path(settings.upload_dir), settings.public_base_url)
    app.state.image_store.ensure_directory()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import and register routers
    from travelstory.api.routers import auth, health, images, stories

    app.include_router(health.router, tags=["health"])
    app.include_router(auth.router, tags=["auth"])
    app.include_router(images.router, tags=["images"])
    app.include_router(stories.router, tags=["stories"])

    # Serve uploaded images and bundled assets
    assets_dir = Path(settings.assets_dir)
    assets_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")
    app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")

    # Register exception handlers
    from travelstory.api.exceptions import register_exception_handlers
    register_exception_handlers(app)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "travelstory.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        reload=settings.environment == "development",
        workers=settings.workers if settings.environment == "production" else 1,
    )
