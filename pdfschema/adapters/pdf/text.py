"""
PyMuPDF Text Extractor - Plain text, page count and metadata from PDF bytes.
"""

from __future__ import annotations

import logging

import pymupdf

from pdfschema.domains.parsing.models import TextExtraction

logger = logging.getLogger(__name__)

__all__ = ["PyMuPDFTextExtractor"]


class PyMuPDFTextExtractor:
    """
    Text extraction capability backed by PyMuPDF.

    Example:
        >>> extractor = PyMuPDFTextExtractor()
        >>> result = extractor.extract(Path("invoice.pdf").read_bytes())
        >>> result.page_count
        2
    """

    def __init__(self, page_separator: str = "\n\n") -> None:
        self.page_separator = page_separator

    def extract(self, data: bytes) -> TextExtraction:
        """
        Extract text from every page.

        Raises:
            ValueError: Document is encrypted
            pymupdf.FileDataError: Bytes are not a parseable PDF
        """
        with pymupdf.open(stream=data, filetype="pdf") as doc:
            if doc.needs_pass:
                raise ValueError("PDF is encrypted")

            page_texts = [page.get_text("text") for page in doc]
            metadata = {k: v for k, v in (doc.metadata or {}).items() if v}
            page_count = doc.page_count

        text = self.page_separator.join(page_texts)
        logger.debug("PyMuPDF extracted %d chars from %d pages", len(text), page_count)

        return TextExtraction(text=text, page_count=page_count, metadata=metadata)
