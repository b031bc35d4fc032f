"""
Extraction Domain - PDF to schema-conformant structured data.

This domain handles:
- Extractor configuration with per-modality model fallback
- Model, system prompt and temperature selection
- TEXT / VISION request building and the single model call
"""

from .contracts import Extractor, LanguageModel
from .models import (
    DEFAULT_MODEL,
    ExtractionMode,
    ExtractionRequest,
    ExtractionResult,
    ExtractorConfig,
    ModelSelection,
)
from .selector import (
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_VISION_SYSTEM_PROMPT,
    is_vision_capable,
    select_model,
)
from .extractor import TEXT_INSTRUCTION, VISION_INSTRUCTION, PdfDataExtractor

__all__ = [
    # Contracts
    "Extractor",
    "LanguageModel",
    # Models
    "DEFAULT_MODEL",
    "ExtractionMode",
    "ExtractionRequest",
    "ExtractionResult",
    "ExtractorConfig",
    "ModelSelection",
    # Selection
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_VISION_SYSTEM_PROMPT",
    "is_vision_capable",
    "select_model",
    # Implementations
    "PdfDataExtractor",
    "TEXT_INSTRUCTION",
    "VISION_INSTRUCTION",
]
