"""
Parsing Contracts - Interfaces for the capabilities the pipeline consumes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .models import RasterizationReport, TextExtraction


@runtime_checkable
class TextExtractor(Protocol):
    """
    Contract for PDF text extraction.

    Example:
        >>> class MyExtractor:
        ...     def extract(self, data: bytes) -> TextExtraction:
        ...         ...
        >>> assert isinstance(MyExtractor(), TextExtractor)
    """

    def extract(self, data: bytes) -> TextExtraction:
        """
        Extract the full plain text of a PDF.

        Args:
            data: Raw PDF bytes

        Returns:
            Text, page count and document metadata

        Raises:
            Exception: If the bytes are not a parseable PDF
        """
        ...


@runtime_checkable
class Rasterizer(Protocol):
    """
    Contract for rendering PDF pages to PNG images.

    Implementations read from a file path and must not raise for individual
    page failures; those are reported in the returned RasterizationReport.
    """

    def rasterize(self, pdf_path: Path, page_count: int) -> RasterizationReport:
        """
        Render every page of a PDF, sequentially and in page order.

        Args:
            pdf_path: Path to the PDF on disk
            page_count: Number of pages to attempt (1..page_count)

        Returns:
            Successful page images and per-page failures
        """
        ...
