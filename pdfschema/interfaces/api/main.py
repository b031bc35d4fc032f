"""
FastAPI Main Application - API entry point.

Run with: uvicorn pdfschema.interfaces.api.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pdfschema import __version__
from pdfschema.config import get_settings

from .deps import cleanup_services
from .middleware import ErrorHandlerMiddleware, LatencyMiddleware, RequestIDMiddleware
from .routes import extraction, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting pdfschema API...")
    logger.info("  Default model: %s", settings.default_model)
    logger.info("  Vision enabled: %s", settings.vision_enabled)
    if not settings.api_key:
        logger.warning("  No API key configured, extraction requests will fail")

    yield

    logger.info("Shutting down pdfschema API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(
        title="pdfschema API",
        description="Extract schema-conformant JSON from PDF documents",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Order matters - last added = outermost
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LatencyMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router, tags=["Health"])
    app.include_router(extraction.router, prefix="/api/extraction", tags=["Extraction"])

    return app


app = create_app()
