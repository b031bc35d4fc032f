"""
Extraction Models - Data types for extraction domain.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_MODEL = "gpt-4o-mini"


class ExtractionMode(str, Enum):
    """Which request shape is sent to the language model."""

    TEXT = "text"
    VISION = "vision"


class ExtractorConfig(BaseModel):
    """
    Immutable extractor configuration.

    ``text_model`` and ``vision_model`` fall back to ``default_model``
    independently. ``system_prompt=None`` uses the built-in instruction,
    while ``""`` sends no system message at all.
    """

    api_key: str = Field(default="", repr=False)
    base_url: str | None = None
    default_model: str = DEFAULT_MODEL
    text_model: str | None = None
    vision_model: str | None = None
    vision_enabled: bool = True
    text_threshold: int = Field(default=100, ge=0)
    system_prompt: str | None = None
    default_temperature: float = 0.0
    timeout_seconds: float = Field(default=120.0, gt=0)

    model_config = {"frozen": True}

    @property
    def effective_text_model(self) -> str:
        return self.text_model if self.text_model is not None else self.default_model

    @property
    def effective_vision_model(self) -> str:
        return self.vision_model if self.vision_model is not None else self.default_model


class ExtractionRequest(BaseModel):
    """A single extraction call: schema, PDF source, and per-call options."""

    schema_: Any = Field(alias="schema")
    pdf_path: Path | None = None
    pdf_buffer: bytes | None = Field(default=None, repr=False)
    temperature: float | None = None
    max_output_tokens: int | None = Field(default=None, gt=0)

    model_config = {"frozen": True, "populate_by_name": True}


class ModelSelection(BaseModel):
    """Resolved model name, system prompt, and temperature for one call."""

    model: str
    system_prompt: str | None = None
    temperature: float = 0.0

    model_config = {"frozen": True}


class ExtractionResult(BaseModel, Generic[T]):
    """Structured data returned by the language model."""

    data: T
    tokens_used: int | None = None
    model_used: str
    mode: ExtractionMode
    page_count: int = Field(ge=1)
