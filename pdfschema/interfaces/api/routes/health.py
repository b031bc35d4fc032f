"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from pdfschema import __version__
from pdfschema.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "pdfschema",
        "version": __version__,
        "llm_configured": bool(settings.api_key),
        "vision_enabled": settings.vision_enabled,
    }
