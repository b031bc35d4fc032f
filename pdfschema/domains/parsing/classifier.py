"""
Content Classifier - Text-sufficiency routing policy.

A PDF is routed to TEXT extraction when its trimmed embedded text reaches
the threshold, otherwise to IMAGE (vision) extraction. Page count, language
and encoding are not considered.

Empty or whitespace-only text is always insufficient, even at threshold 0.
"""

from __future__ import annotations

from .models import ContentKind

__all__ = ["DEFAULT_TEXT_THRESHOLD", "classify", "has_extractable_text"]

DEFAULT_TEXT_THRESHOLD = 100


def has_extractable_text(text: str | None, threshold: int = DEFAULT_TEXT_THRESHOLD) -> bool:
    """
    Check whether extracted text is sufficient for text-mode extraction.

    Args:
        text: Text extracted from the PDF (None is treated as empty)
        threshold: Minimum trimmed length, must be non-negative

    Returns:
        True if the trimmed text is non-empty and at least ``threshold`` long
    """
    if threshold < 0:
        raise ValueError(f"threshold must be non-negative, got {threshold}")
    if not text:
        return False
    trimmed = text.strip()
    return bool(trimmed) and len(trimmed) >= threshold


def classify(text: str | None, threshold: int | None = None) -> ContentKind:
    """Route text to TEXT or IMAGE extraction."""
    if threshold is None:
        threshold = DEFAULT_TEXT_THRESHOLD
    if has_extractable_text(text, threshold):
        return ContentKind.TEXT
    return ContentKind.IMAGE
