"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    EmptyModelResponseError,
    ErrorCode,
    ExtractionFailedError,
    ImageConversionError,
    InvalidPdfError,
    InvalidSchemaError,
    LLMError,
    MissingApiKeyError,
    MissingSourceError,
    PdfParseError,
    PdfReadError,
    PdfSchemaError,
    VisionDisabledError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "PdfSchemaError",
    "MissingApiKeyError",
    "MissingSourceError",
    "InvalidSchemaError",
    "InvalidPdfError",
    "PdfReadError",
    "PdfParseError",
    "ImageConversionError",
    "VisionDisabledError",
    "EmptyModelResponseError",
    "ExtractionFailedError",
    "LLMError",
]
