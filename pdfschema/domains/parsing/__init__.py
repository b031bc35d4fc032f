"""
Parsing Domain - PDF bytes to routed text or page-image content.

This domain handles:
- PDF signature validation
- Text-sufficiency routing (TEXT vs IMAGE)
- Page rasterization for scan-like documents
"""

from .models import (
    ContentKind,
    ImageContent,
    PageFailure,
    PageImage,
    ParsedContent,
    ParsedPdf,
    PdfSource,
    RasterizationReport,
    SourceKind,
    TextContent,
    TextExtraction,
)
from .classifier import DEFAULT_TEXT_THRESHOLD, classify, has_extractable_text
from .contracts import Rasterizer, TextExtractor
from .pipeline import PdfContentPipeline, parse_pdf, validate_pdf, validate_signature

__all__ = [
    # Contracts
    "TextExtractor",
    "Rasterizer",
    # Models
    "ContentKind",
    "ImageContent",
    "PageFailure",
    "PageImage",
    "ParsedContent",
    "ParsedPdf",
    "PdfSource",
    "RasterizationReport",
    "SourceKind",
    "TextContent",
    "TextExtraction",
    # Classifier
    "DEFAULT_TEXT_THRESHOLD",
    "classify",
    "has_extractable_text",
    # Pipeline
    "PdfContentPipeline",
    "parse_pdf",
    "validate_pdf",
    "validate_signature",
]
