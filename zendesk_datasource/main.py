"""
Main entry point for the Zendesk data-source service.

Creates the FastAPI application instance for uvicorn:

    uvicorn zendesk_datasource.main:app --port 8090
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zendesk_datasource import __version__
from zendesk_datasource.api.error_handlers import register_error_handlers
from zendesk_datasource.api.routes import health_router, query_router, resources_router
from zendesk_datasource.cache import CacheConfig, CacheManager
from zendesk_datasource.core.config import get_settings
from zendesk_datasource.core.exceptions import DatasourceConfigError
from zendesk_datasource.core.logging import configure_logging, get_logger
from zendesk_datasource.plugin.datasource import Datasource, DatasourceSettings


# Configure structured logging on module load
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    On startup: build the cache manager and start its sweep, then build the
    datasource from settings. Missing Zendesk credentials leave the service
    up with ``app.state.datasource = None``; data routes then answer 503.
    On shutdown: stop the sweep and close the upstream client.
    """
    settings = get_settings()
    logger.info("Starting zendesk-datasource service", port=settings.port)

    cache = CacheManager(CacheConfig.from_settings(settings))
    await cache.start()
    app.state.cache = cache

    datasource: Datasource | None
    try:
        datasource = Datasource.from_settings(
            DatasourceSettings.from_settings(settings),
            cache,
            timeout=settings.http_timeout_seconds,
            batch_task_timeout=settings.batch_task_timeout_seconds,
        )
    except DatasourceConfigError as e:
        logger.warning("Datasource not configured", error=e.message)
        datasource = None
    app.state.datasource = datasource

    yield

    logger.info("Shutting down zendesk-datasource service")

    if datasource is not None:
        await datasource.close()
        logger.info("Zendesk client closed")

    await cache.stop()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers:
    - query_router: POST /api/query
    - resources_router: /api/resources/*
    - health_router: GET /health, /health/live
    """
    app = FastAPI(
        title="Zendesk Data Source",
        description="Zendesk helpdesk data source with query caching and batch queries",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(query_router)
    app.include_router(resources_router)
    app.include_router(health_router)

    return app


# Create application instance
app = create_app()
