"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes (public redirect/status/metrics, admin)
- Middleware (logging, security headers, kill switch, optional CORS)
- Startup/shutdown of the event store

Design Decisions:
- create_app() builds an independent application with its own state,
  so tests get fresh kill switch, counters and store per instance
- Middleware order (outermost first): logging, CORS, security headers,
  kill switch; the kill switch answers before routing and rate limiting
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from redirector import __version__
from redirector.api import admin, endpoints
from redirector.core.setting import Settings, settings as default_settings
from redirector.middleware.kill_switch import add_kill_switch_middleware
from redirector.middleware.logging import add_logging_middleware
from redirector.middleware.security import add_security_middleware
from redirector.services.state import RedirectorState

logger = logging.getLogger("redirector.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    state: RedirectorState = app.state.redirector
    await state.startup()
    logger.info("Redirector started")
    try:
        yield
    finally:
        # uvicorn has stopped accepting connections by the time we get here
        logger.info("Redirector shutting down, draining click writes")
        await state.shutdown()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the redirector application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Short-Link Redirector",
        description="Hardened short-link redirector with click logging",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.redirector = RedirectorState.from_settings(settings)

    # add_middleware wraps, so the last one added runs first
    add_kill_switch_middleware(app)
    add_security_middleware(app)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    add_logging_middleware(app)

    @app.get("/", tags=["Health"])
    async def root():
        """Static liveness acknowledgment."""
        return {
            "message": "Short-link redirector",
            "version": __version__,
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy"}

    app.include_router(endpoints.router, tags=["Redirect"])
    app.include_router(admin.router, tags=["Admin"])

    return app


app = create_app()
