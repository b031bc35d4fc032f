"""
OpenAI Models - Request/Response types for the chat completions API.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

RESPONSE_SCHEMA_NAME = "extracted_data"


class ImageURL(BaseModel):
    url: str


class TextPart(BaseModel):
    """Text segment of a multi-part user message."""

    type: Literal["text"] = "text"
    text: str


class ImagePart(BaseModel):
    """Image attachment of a multi-part user message."""

    type: Literal["image_url"] = "image_url"
    image_url: ImageURL

    @classmethod
    def from_url(cls, url: str) -> ImagePart:
        return cls(image_url=ImageURL(url=url))


class ChatMessage(BaseModel):
    """A single chat message."""

    role: Literal["system", "user", "assistant"]
    content: str | list[TextPart | ImagePart]


class ChatRequest(BaseModel):
    """Chat completion request constrained to a JSON schema."""

    model: str
    messages: list[ChatMessage]
    response_schema: dict[str, Any]
    temperature: float = 0.0
    max_output_tokens: int | None = None

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body for ``POST /chat/completions``."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [m.model_dump() for m in self.messages],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": RESPONSE_SCHEMA_NAME,
                    "strict": True,
                    "schema": self.response_schema,
                },
            },
            "temperature": self.temperature,
        }
        if self.max_output_tokens is not None:
            payload["max_tokens"] = self.max_output_tokens
        return payload


class ChatCompletion(BaseModel):
    """Parsed chat completion response."""

    content: str | None = None
    model: str
    total_tokens: int | None = None
    finish_reason: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, data: dict[str, Any], requested_model: str) -> ChatCompletion:
        """Parse an API response body, tolerating missing optional fields."""
        choices = data.get("choices") or []
        message = (choices[0].get("message") or {}) if choices else {}
        usage = data.get("usage") or {}

        return cls(
            content=message.get("content"),
            model=data.get("model") or requested_model,
            total_tokens=usage.get("total_tokens"),
            finish_reason=choices[0].get("finish_reason") if choices else None,
            raw=data,
        )
