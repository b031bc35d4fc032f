"""
OpenAI Client - Structured-output chat completions over HTTP.

Works with any OpenAI-compatible ``/chat/completions`` endpoint that supports
``response_format = {"type": "json_schema", ...}``. Each call is a single
request; there is no retry or backoff.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pdfschema.config.errors import ErrorCode, LLMError

from .models import ChatCompletion, ChatMessage, ChatRequest

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_BASE_URL", "OpenAIChatClient"]

DEFAULT_BASE_URL = "https://api.openai.com/v1"

_STATUS_CODES = {
    401: ErrorCode.LLM_AUTH_FAILED,
    403: ErrorCode.LLM_AUTH_FAILED,
    429: ErrorCode.LLM_RATE_LIMITED,
}


class OpenAIChatClient:
    """
    Async client for schema-constrained chat completions.

    Example:
        >>> async with OpenAIChatClient(api_key="sk-...") as client:
        ...     completion = await client.complete(
        ...         "gpt-4o-mini", messages, {"type": "object", ...}
        ...     )
        >>> completion.content
        '{"invoiceNumber": "INV-001"}'
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            api_key: Bearer token for the API
            base_url: API root, defaults to the public OpenAI endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        response_schema: dict[str, Any],
        temperature: float = 0.0,
        max_output_tokens: int | None = None,
    ) -> ChatCompletion:
        """
        Request a completion constrained to a JSON schema.

        Args:
            model: Model identifier
            messages: Ordered chat messages
            response_schema: Object schema the reply must conform to
            temperature: Sampling temperature
            max_output_tokens: Output token cap, omitted when None

        Returns:
            ChatCompletion with raw content and token usage

        Raises:
            LLMError: Transport failure or non-success status
        """
        request = ChatRequest(
            model=model,
            messages=messages,
            response_schema=response_schema,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        client = await self._get_client()

        try:
            response = await client.post("/chat/completions", json=request.to_payload())
        except httpx.HTTPError as e:
            logger.error("Chat completion request failed: %s", e)
            raise LLMError(f"Language model request failed: {e}", {"model": model}) from e

        if response.status_code != 200:
            logger.error("Chat completion error: %s %s", response.status_code, response.text)
            raise LLMError(
                f"Language model API error: {response.status_code}",
                {"model": model, "status": response.status_code, "body": response.text[:500]},
                code=_STATUS_CODES.get(response.status_code, ErrorCode.LLM_UNAVAILABLE),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LLMError("Language model returned a non-JSON body", {"model": model}) from e

        completion = ChatCompletion.from_response(data, model)
        logger.debug(
            "Completion from %s: %s tokens, finish=%s",
            completion.model,
            completion.total_tokens,
            completion.finish_reason,
        )
        return completion

    async def aclose(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> OpenAIChatClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
