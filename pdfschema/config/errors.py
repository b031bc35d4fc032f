"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from pdfschema.config.errors import ErrorCode, PdfSchemaError

    raise PdfSchemaError(ErrorCode.PDF_PARSE_FAILED, "PDF parsing failed")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Configuration errors
    CONFIG_MISSING_API_KEY = "CONFIG_MISSING_API_KEY"

    # Request errors
    REQUEST_MISSING_SOURCE = "REQUEST_MISSING_SOURCE"
    REQUEST_INVALID_SCHEMA = "REQUEST_INVALID_SCHEMA"

    # PDF errors
    PDF_INVALID = "PDF_INVALID"
    PDF_READ_FAILED = "PDF_READ_FAILED"
    PDF_PARSE_FAILED = "PDF_PARSE_FAILED"
    PDF_IMAGE_CONVERSION_FAILED = "PDF_IMAGE_CONVERSION_FAILED"

    # Extraction errors
    EXTRACTION_VISION_DISABLED = "EXTRACTION_VISION_DISABLED"
    EXTRACTION_EMPTY_RESPONSE = "EXTRACTION_EMPTY_RESPONSE"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"

    # LLM/Model errors
    LLM_UNAVAILABLE = "LLM_UNAVAILABLE"
    LLM_RATE_LIMITED = "LLM_RATE_LIMITED"
    LLM_AUTH_FAILED = "LLM_AUTH_FAILED"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PdfSchemaError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class MissingApiKeyError(PdfSchemaError):
    """Extractor configured without an API key."""

    def __init__(self, message: str = "API key is required", details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CONFIG_MISSING_API_KEY, message, details)


class MissingSourceError(PdfSchemaError):
    """Neither (or both) of pdf_path / pdf_buffer supplied."""

    def __init__(
        self,
        message: str = "Either pdf_path or pdf_buffer must be provided",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(ErrorCode.REQUEST_MISSING_SOURCE, message, details)


class InvalidSchemaError(PdfSchemaError):
    """Schema rejected by the schema gate."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.REQUEST_INVALID_SCHEMA, message, details)


class InvalidPdfError(PdfSchemaError):
    """Bytes do not start with the %PDF signature."""

    def __init__(
        self,
        message: str = "Invalid PDF: missing %PDF signature",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(ErrorCode.PDF_INVALID, message, details)


class PdfReadError(PdfSchemaError):
    """Filesystem read of a PDF path failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.PDF_READ_FAILED, message, details)


class PdfParseError(PdfSchemaError):
    """Text extraction could not parse the document."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.PDF_PARSE_FAILED, message, details)


class ImageConversionError(PdfSchemaError):
    """No page could be rasterized for a reason other than a missing backend."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.PDF_IMAGE_CONVERSION_FAILED, message, details)


class VisionDisabledError(PdfSchemaError):
    """Document needs vision extraction but vision mode is off."""

    def __init__(
        self,
        message: str = "PDF contains no extractable text and vision mode is disabled",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(ErrorCode.EXTRACTION_VISION_DISABLED, message, details)


class EmptyModelResponseError(PdfSchemaError):
    """Model call succeeded but returned no content."""

    def __init__(
        self,
        message: str = "No response content from language model",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(ErrorCode.EXTRACTION_EMPTY_RESPONSE, message, details)


class ExtractionFailedError(PdfSchemaError):
    """Any other failure during the model call or response parsing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.EXTRACTION_FAILED, message, details)


class LLMError(PdfSchemaError):
    """LLM transport/API errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.LLM_UNAVAILABLE,
    ) -> None:
        super().__init__(code, message, details)
