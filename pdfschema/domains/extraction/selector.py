"""
Model Selector - Resolve model, system prompt and temperature per mode.
"""

from __future__ import annotations

from .models import ExtractionMode, ExtractorConfig, ModelSelection

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_VISION_SYSTEM_PROMPT",
    "VISION_MODELS",
    "is_vision_capable",
    "select_model",
]

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts structured data from text. "
    "Extract the requested information accurately from the provided text."
)

DEFAULT_VISION_SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts structured data from documents. "
    "Extract the requested information accurately from the provided document images."
)

# Model families known to accept image_url message parts
VISION_MODELS = (
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-4-turbo",
    "gpt-4-vision-preview",
    "claude-3-5-sonnet",
    "claude-3-opus",
    "gemini-1.5-pro",
)


def select_model(
    config: ExtractorConfig,
    mode: ExtractionMode,
    temperature: float | None = None,
) -> ModelSelection:
    """
    Resolve the call parameters for an extraction mode.

    Args:
        config: Extractor configuration
        mode: TEXT or VISION
        temperature: Per-call override, passed through without range checks

    Returns:
        ModelSelection; ``system_prompt`` is None when disabled with ``""``,
        and defaults to a mode-specific instruction when unset
    """
    if mode is ExtractionMode.VISION:
        model = config.effective_vision_model
    else:
        model = config.effective_text_model

    if config.system_prompt is None:
        system_prompt: str | None = (
            DEFAULT_VISION_SYSTEM_PROMPT if mode is ExtractionMode.VISION else DEFAULT_SYSTEM_PROMPT
        )
    else:
        system_prompt = config.system_prompt or None

    return ModelSelection(
        model=model,
        system_prompt=system_prompt,
        temperature=config.default_temperature if temperature is None else temperature,
    )


def is_vision_capable(model: str) -> bool:
    """Best-effort check against known vision model names (substring match)."""
    name = model.lower()
    return any(known in name for known in VISION_MODELS)
