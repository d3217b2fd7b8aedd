"""
FastAPI application entrypoint.

Startup sequence:
  1. Configure structured logging.
  2. Register versioned routers.
  3. Register global exception handlers.

There is nothing to warm up: clustering is pure in-memory computation.
The app is served by Uvicorn:

    uvicorn timeline_api.main:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timeline_api.api.v1.endpoints.health import router as health_router
from timeline_api.api.v1.router import v1_router
from timeline_api.core.config import get_settings
from timeline_api.core.errors import register_exception_handlers
from timeline_api.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    logger.info(
        "Starting %s v%s [%s]",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )
    logger.info(
        "Auth: %s | default min_points=%d | epsilon clamp=[%.0f, %.0f] min",
        "enabled" if settings.auth_enabled else "disabled (open mode)",
        settings.default_min_points,
        settings.epsilon_min_minutes,
        settings.epsilon_max_minutes,
    )
    yield

    logger.info("Shutting down %s.", settings.app_name)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Automatic event detection for shared photo albums.\n\n"
            "Clusters photos by capture time with a 1-D DBSCAN, classifies "
            "each cluster (ceremony, cocktails, dinner, ...) with a confidence "
            "score, and supports manual split / merge corrections.\n\n"
            "**Authentication**: Pass your API key in the `X-Api-Key` header. "
            "Authentication is disabled when the `API_KEY` environment variable is unset."
        ),
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(health_router)   # /health (no prefix, no auth)
    app.include_router(v1_router)       # /v1/events/...

    # Global exception handlers (must come after routers).
    register_exception_handlers(app)

    return app


app = create_app()
