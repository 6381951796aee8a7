"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.database import close_connection_pool
from modules.billing.routes import router as webhooks_router
from modules.users.routes import router as users_router
from run_migrations import apply_pending_migrations

from .dependencies import get_container
from .errors import register_exception_handlers
from .middleware import RequestMetricsMiddleware, TimeoutMiddleware
from .routes import health, metrics
from .telemetry import ITelemetrySink

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. Pending migrations are applied
    only when MIGRATE_ON_STARTUP is set.
    """
    # Startup
    settings = get_settings()
    if settings.migrate_on_startup:
        applied = await asyncio.to_thread(apply_pending_migrations, settings.database_url)
        logger.info("Applied %d pending migration(s)", len(applied))
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    close_connection_pool()
    logger.info("Shutting down %s", settings.app_name)


def create_app(telemetry: Optional[ITelemetrySink] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        telemetry: Sink for request metrics. Defaults to the container's
            OpenTelemetry sink.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="User management API with Stripe subscriptions",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
        openapi_url="/openapi.json" if settings.enable_docs else None,
    )

    # Middleware added last runs first: CORS, then metrics, then timeout
    app.add_middleware(
        TimeoutMiddleware,
        timeout_seconds=settings.request_timeout_seconds,
    )
    app.add_middleware(
        RequestMetricsMiddleware,
        sink=telemetry or get_container().telemetry,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(metrics.router, tags=["metrics"])
    app.include_router(users_router, prefix="/users", tags=["users"])
    app.include_router(webhooks_router, prefix="/webhooks", tags=["webhooks"])

    return app


# Application instance for uvicorn
app = create_app()
