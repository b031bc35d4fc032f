"""
pdf2image Rasterizer - Render PDF pages to PNG via poppler.

Pages are converted one at a time, in order. A failing page is recorded and
the next page is still attempted. Failures caused by missing poppler tooling
are flagged ``backend_unavailable`` so callers can tell a deployment without
rasterization support apart from a document that cannot be rendered.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from pdf2image import convert_from_path
from pdf2image.exceptions import PDFInfoNotInstalledError

from pdfschema.domains.parsing.models import PageFailure, PageImage, RasterizationReport

logger = logging.getLogger(__name__)

__all__ = ["Pdf2ImageRasterizer"]

EMPTY_RESULT = "Conversion returned empty result"


class Pdf2ImageRasterizer:
    """
    Rasterization capability backed by pdf2image (poppler ``pdftoppm``).

    Example:
        >>> rasterizer = Pdf2ImageRasterizer(dpi=200)
        >>> report = rasterizer.rasterize(Path("scan.pdf"), page_count=3)
        >>> [p.page_number for p in report.pages]
        [1, 2, 3]
    """

    def __init__(self, dpi: int = 200, poppler_path: str | None = None) -> None:
        self.dpi = dpi
        self.poppler_path = poppler_path

    def rasterize(self, pdf_path: Path, page_count: int) -> RasterizationReport:
        """Render pages 1..page_count of ``pdf_path``."""
        report = RasterizationReport()

        for page_number in range(1, page_count + 1):
            try:
                png = self._render_page(pdf_path, page_number)
            except (PDFInfoNotInstalledError, FileNotFoundError) as e:
                report.failures.append(
                    PageFailure(page_number=page_number, error=str(e), backend_unavailable=True)
                )
                continue
            except Exception as e:
                logger.debug("Page %d rasterization failed: %s", page_number, e)
                report.failures.append(PageFailure(page_number=page_number, error=str(e)))
                continue

            if png is None:
                report.failures.append(
                    PageFailure(page_number=page_number, error=EMPTY_RESULT, backend_unavailable=True)
                )
                continue

            report.pages.append(PageImage(page_number=page_number, image_bytes=png))

        logger.debug(
            "Rasterized %d/%d pages of %s", len(report.pages), page_count, pdf_path.name
        )
        return report

    def _render_page(self, pdf_path: Path, page_number: int) -> bytes | None:
        """Render a single page to PNG bytes, or None if nothing was produced."""
        images = convert_from_path(
            str(pdf_path),
            dpi=self.dpi,
            first_page=page_number,
            last_page=page_number,
            fmt="png",
            poppler_path=self.poppler_path,
        )
        if not images:
            return None

        buffer = io.BytesIO()
        images[0].save(buffer, format="PNG")
        return buffer.getvalue()
