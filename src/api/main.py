"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.pdf.renderer import WeasyPrintPassRenderer
from src.adapters.repository.postgres import run_migrations
from src.api.dependencies import build_email_sender
from src.api.v1 import router as v1_router
from src.config.app_logging import configure_logging
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Event Registration API v1 - Submit registrations, manage categories, "
        "and email registration passes",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Builds the email sender and pass renderer
    - Closes connection pool and HTTP sessions on shutdown
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Starting application (environment=%s)...", settings.environment)
    logger.info("Connecting to database...")

    # Create connection pool with explicit sizing
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    email_sender = build_email_sender(settings)
    logger.info("Email backend: %s", settings.email_backend)
    if settings.override_recipient:
        logger.info("All outgoing email redirected to %s", settings.override_recipient)

    # Store long-lived adapters in app state for dependency injection
    app.state.pool = pool
    app.state.email_sender = email_sender
    app.state.pass_renderer = WeasyPrintPassRenderer()

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    close = getattr(email_sender, "close", None)
    if close is not None:
        close()
    pool.close()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="eventpass",
    description="Event Registration API - Collects participant registrations and emails "
    "registration passes",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy"}
