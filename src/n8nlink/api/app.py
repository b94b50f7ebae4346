"""n8nlink FastAPI application factory."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from n8nlink import __version__
from n8nlink.client import N8nClient
from n8nlink.config import Settings, load_settings

from .limiter import limiter, rate_limit_exceeded
from .middleware import add_http_middleware
from .routes import health, resources, tools

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> N8nClient:
    """Build the n8n client from resolved settings."""
    return N8nClient(settings.api_url, settings.api_key, settings.client_options())


def create_app(
    *,
    client: N8nClient | None = None,
    settings: Settings | None = None,
    enable_cors: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        client: n8n client to serve. Built from settings when omitted.
        settings: Runtime settings. Loaded from the environment when omitted.
        enable_cors: Enable CORS middleware.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="n8nlink API",
        description="n8n workflows, executions and webhooks as agent tools",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.state.settings = settings
    app.state.client = client or create_client(settings)
    app.state.started_at = time.monotonic()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded)

    add_http_middleware(app, production=settings.production)

    # Production requires explicit origins
    if enable_cors:
        if settings.production:
            origins = settings.allowed_origins
            if not origins:
                logger.warning(
                    "No ALLOWED_ORIGINS set in production - cross-origin requests are rejected"
                )
        else:
            origins = settings.allowed_origins or ["*"]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=settings.production,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(tools.router, prefix="/api", tags=["tools"])
    app.include_router(resources.router, prefix="/api", tags=["resources"])

    return app
