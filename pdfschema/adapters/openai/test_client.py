"""
Tests for OpenAI chat client adapter.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from pdfschema.config.errors import ErrorCode, LLMError

from .client import OpenAIChatClient
from .models import ChatCompletion, ChatMessage, ImagePart, TextPart

SCHEMA = {
    "type": "object",
    "properties": {"invoiceNumber": {"type": "string"}},
    "required": ["invoiceNumber"],
    "additionalProperties": False,
}


def _ok_body(content: str | None = '{"invoiceNumber": "INV-001"}') -> dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "model": "gpt-4o-mini-2024-07-18",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 40, "completion_tokens": 10, "total_tokens": 50},
    }


class Recorder:
    """Capture outgoing requests and reply with a canned response."""

    def __init__(self, status: int = 200, body: Any = None) -> None:
        self.status = status
        self.body = _ok_body() if body is None else body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status, json=self.body)
        return httpx.Response(self.status, text=self.body)

    @property
    def payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def _client(recorder: Recorder, **kwargs: Any) -> OpenAIChatClient:
    return OpenAIChatClient(
        api_key="sk-test", transport=httpx.MockTransport(recorder), **kwargs
    )


def _messages() -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content="Extract data."),
        ChatMessage(role="user", content="Invoice INV-001"),
    ]


# --- Model Tests ---


def test_completion_from_response() -> None:
    completion = ChatCompletion.from_response(_ok_body(), "gpt-4o-mini")
    assert completion.content == '{"invoiceNumber": "INV-001"}'
    assert completion.model == "gpt-4o-mini-2024-07-18"
    assert completion.total_tokens == 50
    assert completion.finish_reason == "stop"


def test_completion_tolerates_missing_fields() -> None:
    completion = ChatCompletion.from_response({}, "gpt-4o-mini")
    assert completion.content is None
    assert completion.model == "gpt-4o-mini"
    assert completion.total_tokens is None


def test_image_part_serialization() -> None:
    part = ImagePart.from_url("data:image/png;base64,AAAA")
    assert part.model_dump() == {
        "type": "image_url",
        "image_url": {"url": "data:image/png;base64,AAAA"},
    }


# --- Client Tests ---


async def test_complete_sends_structured_output_request() -> None:
    recorder = Recorder()
    async with _client(recorder) as client:
        completion = await client.complete("gpt-4o-mini", _messages(), SCHEMA, temperature=0.0)

    request = recorder.requests[0]
    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"

    payload = recorder.payload
    assert payload["model"] == "gpt-4o-mini"
    assert payload["temperature"] == 0.0
    assert payload["response_format"] == {
        "type": "json_schema",
        "json_schema": {"name": "extracted_data", "strict": True, "schema": SCHEMA},
    }
    assert "max_tokens" not in payload
    assert completion.total_tokens == 50


async def test_complete_includes_max_tokens_when_set() -> None:
    recorder = Recorder()
    async with _client(recorder) as client:
        await client.complete("gpt-4o-mini", _messages(), SCHEMA, max_output_tokens=256)

    assert recorder.payload["max_tokens"] == 256


async def test_complete_serializes_image_parts() -> None:
    recorder = Recorder()
    message = ChatMessage(
        role="user",
        content=[
            TextPart(text="Extract the following:"),
            ImagePart.from_url("data:image/png;base64,AAAA"),
        ],
    )
    async with _client(recorder) as client:
        await client.complete("gpt-4o", [message], SCHEMA)

    content = recorder.payload["messages"][0]["content"]
    assert content[0] == {"type": "text", "text": "Extract the following:"}
    assert content[1]["image_url"]["url"] == "data:image/png;base64,AAAA"


async def test_custom_base_url() -> None:
    recorder = Recorder()
    async with _client(recorder, base_url="http://localhost:8080/v1/") as client:
        await client.complete("local-model", _messages(), SCHEMA)

    assert str(recorder.requests[0].url) == "http://localhost:8080/v1/chat/completions"


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (401, ErrorCode.LLM_AUTH_FAILED),
        (429, ErrorCode.LLM_RATE_LIMITED),
        (500, ErrorCode.LLM_UNAVAILABLE),
    ],
)
async def test_error_status_maps_to_code(status: int, code: ErrorCode) -> None:
    recorder = Recorder(status=status, body={"error": {"message": "nope"}})
    async with _client(recorder) as client:
        with pytest.raises(LLMError) as exc_info:
            await client.complete("gpt-4o-mini", _messages(), SCHEMA)

    assert exc_info.value.code == code
    assert exc_info.value.details["status"] == status
    # single attempt, no retries
    assert len(recorder.requests) == 1


async def test_transport_error_raises_llm_error() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = OpenAIChatClient(api_key="sk-test", transport=httpx.MockTransport(fail))
    with pytest.raises(LLMError, match="connection refused"):
        await client.complete("gpt-4o-mini", _messages(), SCHEMA)
    await client.aclose()


async def test_non_json_body_raises_llm_error() -> None:
    recorder = Recorder(body="<html>gateway</html>")
    async with _client(recorder) as client:
        with pytest.raises(LLMError, match="non-JSON"):
            await client.complete("gpt-4o-mini", _messages(), SCHEMA)
