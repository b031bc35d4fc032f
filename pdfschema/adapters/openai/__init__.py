"""
OpenAI Adapter - Schema-constrained chat completions.
"""

from .client import DEFAULT_BASE_URL, OpenAIChatClient
from .models import (
    RESPONSE_SCHEMA_NAME,
    ChatCompletion,
    ChatMessage,
    ChatRequest,
    ImagePart,
    ImageURL,
    TextPart,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "OpenAIChatClient",
    "RESPONSE_SCHEMA_NAME",
    "ChatCompletion",
    "ChatMessage",
    "ChatRequest",
    "ImagePart",
    "ImageURL",
    "TextPart",
]
