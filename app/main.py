"""Fashion Catalog API main application module.

This module builds the FastAPI application and configures core
middleware, routers, exception handlers and the database lifecycle.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import (
    brands_router,
    collections_router,
    colors_router,
    health_router,
    products_router,
    styles_router,
    variants_router,
)
from app.api.errors import setup_exception_handlers
from app.api.middleware import setup_middleware
from app.infrastructure.config import Settings, settings
from app.infrastructure.database import Database
from app.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        app_settings: Settings to use; defaults to the process settings.

    Returns:
        Configured FastAPI application.
    """
    config = app_settings or settings
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Handle application startup and shutdown events.

        Args:
            app: The FastAPI application instance.

        Yields:
            None after startup, cleanup happens after yield.
        """
        # Startup
        logger.info(
            "Starting Fashion Catalog API",
            version=config.api_version,
            debug=config.debug,
        )
        database = Database(config.database_url, echo=config.debug)
        if config.create_tables_on_startup:
            await database.create_all()
            logger.info("Database tables created")

        app.state.database = database
        app.state.started_at = time.monotonic()

        yield

        # Shutdown
        logger.info("Shutting down Fashion Catalog API")
        await database.dispose()

    app = FastAPI(
        title="Fashion Catalog API",
        description="CRUD API for a fashion e-commerce product catalog",
        version=config.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware (must be added before custom middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_middleware(app)
    setup_exception_handlers(app, debug=config.debug)

    # Include routers
    app.include_router(health_router, tags=["Health"])
    for router in (
        products_router,
        variants_router,
        colors_router,
        styles_router,
        collections_router,
        brands_router,
    ):
        app.include_router(router, prefix=config.api_prefix)

    return app


app = create_app()
