"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from onboarding.adapters.dispatch import ThreadPoolDispatcher
from onboarding.adapters.repository import (
    InMemoryStore,
    PostgresUnitOfWork,
    check_health,
    run_migrations,
)
from onboarding.api.dependencies import build_notifier, default_password_encoder
from onboarding.api.v1 import router as v1_router
from onboarding.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Customer onboarding API v1 - Register customers and confirm email addresses",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool and runs migrations (postgres backend)
    - Starts the notification dispatcher
    - Drains the dispatcher and closes the pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting application...")

    pool: ConnectionPool | None = None
    if settings.repository_backend == "postgres":
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        logger.info("Running database migrations...")
        run_migrations(pool)
        app.state.unit_of_work = partial(PostgresUnitOfWork, pool)
        app.state.health_check = partial(check_health, pool)
    else:
        logger.warning("Using in-memory repository; data is lost on restart")
        store = InMemoryStore()
        app.state.unit_of_work = store.unit_of_work
        app.state.health_check = lambda: None

    dispatcher = ThreadPoolDispatcher(max_workers=settings.notifier_workers)
    app.state.dispatcher = dispatcher
    app.state.notifier = build_notifier(settings)
    app.state.password_encoder = default_password_encoder(settings)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    dispatcher.shutdown(wait=True)
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="onboarding",
    description="Customer registration and email confirmation API",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/api/v1")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with storage validation.

    Returns 200 OK if application and storage are healthy.
    Raises exception if the database connection fails.
    """
    request.app.state.health_check()
    return {"status": "healthy"}
