"""Tests for API Routes."""

from __future__ import annotations

import json
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from pdfschema.config.errors import (
    ErrorCode,
    ExtractionFailedError,
    InvalidPdfError,
    MissingApiKeyError,
    VisionDisabledError,
)
from pdfschema.domains.extraction import ExtractionMode, ExtractionResult
from pdfschema.domains.parsing import ImageContent, PageImage, ParsedPdf, TextContent

from .deps import get_extractor, get_pipeline
from .main import create_app

PDF_BYTES = b"%PDF-1.7\n%stub"
SCHEMA = {"invoiceNumber": {"type": "string"}}


@pytest.fixture
def mock_extractor() -> MagicMock:
    """Create a mock extractor."""
    mock = MagicMock()
    mock.extract = AsyncMock(
        return_value=ExtractionResult(
            data={"invoiceNumber": "INV-1"},
            tokens_used=42,
            model_used="gpt-4o-mini",
            mode=ExtractionMode.TEXT,
            page_count=1,
        )
    )
    return mock


@pytest.fixture
def mock_pipeline() -> MagicMock:
    """Create a mock PDF pipeline."""
    mock = MagicMock()
    mock.parse = AsyncMock(
        return_value=ParsedPdf(content=TextContent(body="Invoice INV-1"), page_count=2)
    )
    return mock


@pytest.fixture
def client(
    mock_extractor: MagicMock, mock_pipeline: MagicMock
) -> Generator[TestClient, None, None]:
    """Create a test client with mocked dependencies."""
    app = create_app()
    app.dependency_overrides[get_extractor] = lambda: mock_extractor
    app.dependency_overrides[get_pipeline] = lambda: mock_pipeline

    yield TestClient(app)

    app.dependency_overrides.clear()


def _upload(**form: str) -> dict:
    return {
        "files": {"file": ("invoice.pdf", PDF_BYTES, "application/pdf")},
        "data": form,
    }


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "pdfschema"
    assert "X-Request-ID" in response.headers
    assert "X-Response-Time-Ms" in response.headers


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_extract_endpoint(client: TestClient, mock_extractor: MagicMock) -> None:
    response = client.post(
        "/api/extraction/extract",
        **_upload(schema=json.dumps(SCHEMA), temperature="0.2", max_output_tokens="256"),
    )
    assert response.status_code == 200

    data = response.json()
    assert data["data"] == {"invoiceNumber": "INV-1"}
    assert data["model_used"] == "gpt-4o-mini"
    assert data["tokens_used"] == 42
    assert data["mode"] == "text"
    assert data["filename"] == "invoice.pdf"

    request = mock_extractor.extract.await_args.args[0]
    assert request.schema_ == SCHEMA
    assert request.pdf_buffer == PDF_BYTES
    assert request.temperature == 0.2
    assert request.max_output_tokens == 256


def test_extract_rejects_malformed_schema_json(
    client: TestClient, mock_extractor: MagicMock
) -> None:
    response = client.post("/api/extraction/extract", **_upload(schema="{not json"))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == ErrorCode.REQUEST_INVALID_SCHEMA.value
    mock_extractor.extract.assert_not_awaited()


@pytest.mark.parametrize("value", ["0", "-5"])
def test_extract_rejects_non_positive_max_output_tokens(
    client: TestClient, mock_extractor: MagicMock, value: str
) -> None:
    response = client.post(
        "/api/extraction/extract",
        **_upload(schema=json.dumps(SCHEMA), max_output_tokens=value),
    )

    assert response.status_code == 422
    mock_extractor.extract.assert_not_awaited()


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (InvalidPdfError(), 400),
        (VisionDisabledError(), 422),
        (ExtractionFailedError("Failed to extract data from PDF: boom"), 502),
    ],
)
def test_extract_error_mapping(
    client: TestClient, mock_extractor: MagicMock, error: Exception, status: int
) -> None:
    mock_extractor.extract.side_effect = error

    response = client.post("/api/extraction/extract", **_upload(schema=json.dumps(SCHEMA)))

    assert response.status_code == status
    body = response.json()
    assert body["error"]["code"] == error.code.value  # type: ignore[attr-defined]
    assert body["request_id"]


def test_extract_without_api_key() -> None:
    def no_key() -> None:
        raise MissingApiKeyError()

    app = create_app()
    app.dependency_overrides[get_extractor] = no_key
    client = TestClient(app)

    response = client.post("/api/extraction/extract", **_upload(schema=json.dumps(SCHEMA)))

    assert response.status_code == 503
    assert response.json()["error"]["code"] == ErrorCode.CONFIG_MISSING_API_KEY.value


def test_inspect_text_pdf(client: TestClient, mock_pipeline: MagicMock) -> None:
    response = client.post("/api/extraction/inspect", **_upload(threshold="5"))
    assert response.status_code == 200

    data = response.json()
    assert data["routing"] == "text"
    assert data["page_count"] == 2
    assert data["text_length"] == len("Invoice INV-1")
    assert mock_pipeline.parse.await_args.args == (PDF_BYTES, 5)


def test_inspect_scanned_pdf(client: TestClient, mock_pipeline: MagicMock) -> None:
    pages = [PageImage(page_number=n, image_bytes=b"png") for n in (1, 3)]
    mock_pipeline.parse.return_value = ParsedPdf(
        content=ImageContent(pages=pages), page_count=3
    )

    response = client.post("/api/extraction/inspect", **_upload())

    data = response.json()
    assert data["routing"] == "image"
    assert data["rendered_pages"] == [1, 3]
    assert data["text_length"] is None
