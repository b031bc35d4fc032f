"""
Adapters - External service integrations.

All external API calls are wrapped here to isolate domains from third-party changes.
"""

from .openai import ChatCompletion, ChatMessage, OpenAIChatClient
from .pdf import Pdf2ImageRasterizer, PyMuPDFTextExtractor

__all__ = [
    # Language model
    "OpenAIChatClient",
    "ChatCompletion",
    "ChatMessage",
    # PDF
    "PyMuPDFTextExtractor",
    "Pdf2ImageRasterizer",
]
