"""
PDF Adapters - Text extraction (PyMuPDF) and page rasterization (pdf2image).
"""

from .raster import Pdf2ImageRasterizer
from .text import PyMuPDFTextExtractor

__all__ = ["PyMuPDFTextExtractor", "Pdf2ImageRasterizer"]
