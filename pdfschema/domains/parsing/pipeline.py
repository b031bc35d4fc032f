"""
PDF Content Pipeline - Signature check, text extraction, routing, rasterization.

Flow for a single parse:
    read bytes -> %PDF signature gate -> text extraction -> classify
        TEXT  -> ParsedPdf(TextContent)
        IMAGE -> bytes to scoped temp file -> rasterize -> ParsedPdf(ImageContent)

Blocking library calls run in worker threads so ``parse`` can be awaited
from concurrent extractions.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import tempfile
import uuid
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from pdfschema.config.errors import (
    ImageConversionError,
    InvalidPdfError,
    PdfParseError,
    PdfReadError,
)

from .classifier import DEFAULT_TEXT_THRESHOLD, has_extractable_text
from .contracts import Rasterizer, TextExtractor
from .models import (
    ImageContent,
    ParsedPdf,
    PdfSource,
    RasterizationReport,
    SourceKind,
    TextContent,
)

if TYPE_CHECKING:
    from pdfschema.config.settings import Settings

logger = logging.getLogger(__name__)

__all__ = [
    "PDF_SIGNATURE",
    "PdfContentPipeline",
    "parse_pdf",
    "validate_pdf",
    "validate_signature",
]

PDF_SIGNATURE = b"%PDF"


def has_pdf_signature(data: bytes) -> bool:
    return data[: len(PDF_SIGNATURE)] == PDF_SIGNATURE


def validate_signature(source: PdfSource | bytes | str | Path) -> bool:
    """
    Check that a PDF source starts with the ``%PDF`` magic bytes.

    Only the header is inspected; the rest of the document is not parsed.
    Unreadable paths yield False.
    """
    source = PdfSource.of(source)
    if source.kind is SourceKind.BYTES:
        return has_pdf_signature(source.data or b"")

    try:
        with open(source.path, "rb") as f:  # type: ignore[arg-type]
            return has_pdf_signature(f.read(len(PDF_SIGNATURE)))
    except OSError:
        return False


@contextlib.contextmanager
def scoped_temp_pdf(data: bytes) -> Iterator[Path]:
    """
    Write PDF bytes to a uniquely named temporary file for path-based tools.

    The file is removed on every exit path. Removal failures are logged and
    never raised.
    """
    fd, name = tempfile.mkstemp(prefix=f"pdfschema-{uuid.uuid4().hex}-", suffix=".pdf")
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to clean up temporary file %s: %s", path, e)


class PdfContentPipeline:
    """
    Turn a PdfSource into routed ParsedPdf content.

    Example:
        >>> pipeline = PdfContentPipeline()
        >>> parsed = await pipeline.parse(PdfSource(path=Path("invoice.pdf")))
        >>> parsed.is_text
        True
    """

    def __init__(
        self,
        text_extractor: TextExtractor | None = None,
        rasterizer: Rasterizer | None = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            text_extractor: Text extraction capability (PyMuPDF by default)
            rasterizer: Rasterization capability (pdf2image by default)
        """
        if text_extractor is None or rasterizer is None:
            from pdfschema.adapters.pdf import Pdf2ImageRasterizer, PyMuPDFTextExtractor

            text_extractor = text_extractor or PyMuPDFTextExtractor()
            rasterizer = rasterizer or Pdf2ImageRasterizer()

        self._text_extractor = text_extractor
        self._rasterizer = rasterizer

    @classmethod
    def from_settings(cls, settings: Settings) -> PdfContentPipeline:
        """Build a pipeline with the configured rasterization options."""
        from pdfschema.adapters.pdf import Pdf2ImageRasterizer

        return cls(
            rasterizer=Pdf2ImageRasterizer(
                dpi=settings.raster_dpi, poppler_path=settings.poppler_path
            )
        )

    async def parse(
        self,
        source: PdfSource | bytes | str | Path,
        text_threshold: int = DEFAULT_TEXT_THRESHOLD,
    ) -> ParsedPdf:
        """
        Parse a PDF and route it to text or image content.

        Args:
            source: PDF path or bytes
            text_threshold: Minimum trimmed text length for TEXT routing

        Returns:
            ParsedPdf with TextContent or ImageContent

        Raises:
            PdfReadError: Path could not be read
            InvalidPdfError: Bytes lack the %PDF signature
            PdfParseError: Text extraction could not parse the document
            ImageConversionError: No page could be rasterized
        """
        source = PdfSource.of(source)
        data = await self._read(source)

        if not has_pdf_signature(data):
            raise InvalidPdfError()

        try:
            extraction = await asyncio.to_thread(self._text_extractor.extract, data)
        except Exception as e:
            raise PdfParseError(f"Failed to parse PDF: {e}") from e

        if extraction.page_count < 1:
            raise PdfParseError("Failed to parse PDF: PDF contains no pages")

        metadata = extraction.metadata or None

        if has_extractable_text(extraction.text, text_threshold):
            logger.info(
                "PDF routed to text extraction (%d chars, %d pages)",
                len(extraction.text.strip()),
                extraction.page_count,
            )
            return ParsedPdf(
                content=TextContent(body=extraction.text),
                page_count=extraction.page_count,
                metadata=metadata,
            )

        logger.info(
            "PDF has insufficient text (%d < %d chars), rasterizing %d pages",
            len(extraction.text.strip()),
            text_threshold,
            extraction.page_count,
        )
        try:
            report = await asyncio.to_thread(self._rasterize, data, extraction.page_count)
        except Exception as e:
            raise ImageConversionError(f"Failed to convert PDF to images: {e}") from e
        self._check_report(report, extraction.page_count)

        return ParsedPdf(
            content=ImageContent(pages=report.pages),
            page_count=extraction.page_count,
            metadata=metadata,
        )

    async def _read(self, source: PdfSource) -> bytes:
        if source.kind is SourceKind.BYTES:
            return source.data or b""
        try:
            return await asyncio.to_thread(source.path.read_bytes)  # type: ignore[union-attr]
        except OSError as e:
            raise PdfReadError(
                f"Failed to read PDF from path: {e}", {"path": str(source.path)}
            ) from e

    def _rasterize(self, data: bytes, page_count: int) -> RasterizationReport:
        with scoped_temp_pdf(data) as pdf_path:
            return self._rasterizer.rasterize(pdf_path, page_count)

    @staticmethod
    def _check_report(report: RasterizationReport, page_count: int) -> None:
        """Apply the zero/partial page policy to a rasterization report."""
        if report.pages:
            if report.failures:
                logger.warning(
                    "Partial PDF conversion: %d/%d pages converted. Failed pages: %s",
                    len(report.pages),
                    page_count,
                    report.describe_failures(),
                )
            return

        if report.backend_unavailable:
            logger.warning(
                "PDF to image conversion unavailable (poppler missing?), "
                "returning no page images. Errors: %s",
                report.describe_failures(),
            )
            return

        raise ImageConversionError(
            f"Failed to convert any PDF pages to images. Errors: {report.describe_failures()}",
            {"failures": [f.model_dump() for f in report.failures]},
        )


async def parse_pdf(
    source: PdfSource | bytes | str | Path,
    text_threshold: int = DEFAULT_TEXT_THRESHOLD,
) -> ParsedPdf:
    """Parse a PDF with the default PyMuPDF/pdf2image pipeline."""
    return await PdfContentPipeline().parse(source, text_threshold)


async def validate_pdf(
    source: PdfSource | bytes | str | Path,
    pipeline: PdfContentPipeline | None = None,
) -> bool:
    """Return whether a PDF can be fully parsed."""
    try:
        await (pipeline or PdfContentPipeline()).parse(source)
    except Exception as e:
        logger.debug("PDF validation failed: %s", e)
        return False
    return True
