"""
Extraction Contracts - Interfaces for extraction domain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .models import ExtractionRequest, ExtractionResult

if TYPE_CHECKING:
    from pdfschema.adapters.openai import ChatCompletion, ChatMessage


@runtime_checkable
class LanguageModel(Protocol):
    """
    Contract for schema-constrained chat completion.

    Example:
        >>> class MyModel:
        ...     async def complete(self, model, messages, response_schema,
        ...                        temperature=0.0, max_output_tokens=None):
        ...         ...
        >>> assert isinstance(MyModel(), LanguageModel)
    """

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        response_schema: dict[str, Any],
        temperature: float = 0.0,
        max_output_tokens: int | None = None,
    ) -> ChatCompletion:
        """
        Request a completion constrained to ``response_schema``.

        Returns:
            Completion with content (possibly None), model, and token usage
        """
        ...


@runtime_checkable
class Extractor(Protocol):
    """Contract for PDF to structured data extraction."""

    async def extract(self, request: ExtractionRequest) -> ExtractionResult[Any]:
        """
        Extract schema-conformant data from a PDF.

        Args:
            request: Schema, PDF source, and call options

        Returns:
            Parsed data with token usage and resolved model
        """
        ...
