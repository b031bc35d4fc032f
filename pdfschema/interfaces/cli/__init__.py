"""
CLI Interface - Command-line tools for pdfschema.

Provides commands for:
- Schema-driven extraction
- PDF routing inspection
- Serving the API
"""

from .main import app, main

__all__ = ["app", "main"]
