"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton pipeline and extractor instances built from settings.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pdfschema.config import get_settings
from pdfschema.domains.extraction import PdfDataExtractor
from pdfschema.domains.parsing import PdfContentPipeline

logger = logging.getLogger(__name__)


@lru_cache
def get_pipeline() -> PdfContentPipeline:
    """Get PDF content pipeline singleton."""
    return PdfContentPipeline.from_settings(get_settings())


@lru_cache
def get_extractor() -> PdfDataExtractor:
    """
    Get extractor singleton.

    Raises:
        MissingApiKeyError: No API key configured (not cached, retried per request)
    """
    settings = get_settings()
    return PdfDataExtractor(settings.to_extractor_config(), pipeline=get_pipeline())


async def cleanup_services() -> None:
    """Close the extractor's HTTP client on shutdown."""
    if get_extractor.cache_info().currsize:
        await get_extractor().aclose()
        get_extractor.cache_clear()
        logger.info("Extractor closed")
