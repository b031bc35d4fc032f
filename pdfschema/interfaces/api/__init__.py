"""
API Interface - FastAPI REST API.

Exposes PDF extraction and routing inspection over HTTP.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
