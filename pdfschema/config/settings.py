"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables (prefix ``PDFSCHEMA_``) and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from pdfschema.domains.extraction.models import ExtractorConfig


class Settings(BaseSettings):
    """Application settings."""

    # LLM endpoint (any OpenAI-compatible chat completions API)
    api_key: str = ""
    base_url: str | None = None
    timeout_seconds: float = 120.0

    # Model selection
    default_model: str = "gpt-4o-mini"
    text_model: str | None = None
    vision_model: str | None = None
    system_prompt: str | None = None
    default_temperature: float = 0.0

    # Routing
    vision_enabled: bool = True
    text_threshold: int = 100

    # Rasterization
    raster_dpi: int = 200
    poppler_path: str | None = None

    # Logging
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    model_config = SettingsConfigDict(
        env_prefix="PDFSCHEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def to_extractor_config(self, **overrides: object) -> ExtractorConfig:
        """Build an immutable extractor configuration from these settings."""
        from pdfschema.domains.extraction.models import ExtractorConfig

        values: dict[str, object] = {
            "api_key": self.api_key,
            "base_url": self.base_url,
            "default_model": self.default_model,
            "text_model": self.text_model,
            "vision_model": self.vision_model,
            "vision_enabled": self.vision_enabled,
            "text_threshold": self.text_threshold,
            "system_prompt": self.system_prompt,
            "default_temperature": self.default_temperature,
            "timeout_seconds": self.timeout_seconds,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ExtractorConfig(**values)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
