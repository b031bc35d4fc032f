"""
Extraction Routes - PDF extraction endpoints.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from pdfschema.config import InvalidSchemaError, get_settings
from pdfschema.domains.extraction import ExtractionMode, ExtractionRequest, PdfDataExtractor
from pdfschema.domains.parsing import ImageContent, PdfContentPipeline

from ..deps import get_extractor, get_pipeline

router = APIRouter()


class ExtractionResponse(BaseModel):
    """Extraction result response."""

    filename: str | None
    data: Any
    model_used: str
    tokens_used: int | None
    mode: ExtractionMode
    page_count: int


class InspectionResponse(BaseModel):
    """Routing decision for an uploaded PDF."""

    filename: str | None
    routing: str
    page_count: int
    text_length: int | None = None
    rendered_pages: list[int] | None = None
    metadata: dict[str, Any] | None = None


@router.post("/extract", response_model=ExtractionResponse)
async def extract_pdf(
    file: UploadFile = File(...),
    schema: str = Form(..., description="JSON schema or shorthand property map"),
    temperature: float | None = Form(None),
    max_output_tokens: int | None = Form(None, ge=1),
    extractor: PdfDataExtractor = Depends(get_extractor),
) -> ExtractionResponse:
    """
    Extract schema-conformant JSON from an uploaded PDF.

    Text PDFs are sent to the text model; scanned PDFs are rendered to
    page images and sent to the vision model.
    """
    try:
        parsed_schema = json.loads(schema)
    except ValueError as e:
        raise InvalidSchemaError(f"Schema must be valid JSON: {e}") from e

    result = await extractor.extract(
        ExtractionRequest(
            schema=parsed_schema,
            pdf_buffer=await file.read(),
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
    )
    return ExtractionResponse(
        filename=file.filename,
        data=result.data,
        model_used=result.model_used,
        tokens_used=result.tokens_used,
        mode=result.mode,
        page_count=result.page_count,
    )


@router.post("/inspect", response_model=InspectionResponse)
async def inspect_pdf(
    file: UploadFile = File(...),
    threshold: int | None = Form(None, ge=0),
    pipeline: PdfContentPipeline = Depends(get_pipeline),
) -> InspectionResponse:
    """Parse an uploaded PDF and report how it would be routed."""
    if threshold is None:
        threshold = get_settings().text_threshold

    parsed = await pipeline.parse(await file.read(), threshold)

    content = parsed.content
    if isinstance(content, ImageContent):
        return InspectionResponse(
            filename=file.filename,
            routing="image",
            page_count=parsed.page_count,
            rendered_pages=content.page_numbers,
            metadata=parsed.metadata,
        )
    return InspectionResponse(
        filename=file.filename,
        routing="text",
        page_count=parsed.page_count,
        text_length=len(content.body),
        metadata=parsed.metadata,
    )
