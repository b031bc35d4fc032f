"""
PDF Data Extractor - Schema-constrained extraction from PDF documents.

Orchestrates one extraction:
    source check -> schema gate -> parse PDF -> TEXT or VISION message
        -> model selection -> single chat completion -> JSON result

Nothing is retried; a failed model call fails the extraction.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pdfschema.adapters.openai import ChatMessage, ImagePart, OpenAIChatClient, TextPart
from pdfschema.config.errors import (
    EmptyModelResponseError,
    ExtractionFailedError,
    MissingApiKeyError,
    MissingSourceError,
    PdfSchemaError,
    VisionDisabledError,
)
from pdfschema.domains.parsing import (
    ImageContent,
    ParsedPdf,
    PdfContentPipeline,
    PdfSource,
    TextContent,
)
from pdfschema.domains.schema import format_schema_for_openai, validate_schema

from .contracts import LanguageModel
from .models import (
    ExtractionMode,
    ExtractionRequest,
    ExtractionResult,
    ExtractorConfig,
    ModelSelection,
)
from .selector import is_vision_capable, select_model

logger = logging.getLogger(__name__)

__all__ = ["PdfDataExtractor", "TEXT_INSTRUCTION", "VISION_INSTRUCTION"]

TEXT_INSTRUCTION = "Extract the following information from this text:"
VISION_INSTRUCTION = "Extract the following structured information from these document pages:"


class PdfDataExtractor:
    """
    Extract JSON conforming to a caller schema from a PDF.

    Text-bearing PDFs are sent as plain text; scan-like PDFs are rendered
    to page images and sent to a vision model.

    Example:
        >>> extractor = PdfDataExtractor(ExtractorConfig(api_key="sk-..."))
        >>> result = await extractor.extract(
        ...     ExtractionRequest(
        ...         schema={"invoiceNumber": {"type": "string"}},
        ...         pdf_path=Path("invoice.pdf"),
        ...     )
        ... )
        >>> result.data
        {'invoiceNumber': 'INV-001'}
    """

    def __init__(
        self,
        config: ExtractorConfig,
        llm: LanguageModel | None = None,
        pipeline: PdfContentPipeline | None = None,
    ) -> None:
        """
        Initialize extractor.

        Args:
            config: Extractor configuration
            llm: Language model capability (OpenAI-compatible client by default)
            pipeline: PDF content pipeline (PyMuPDF/pdf2image by default)

        Raises:
            MissingApiKeyError: ``config.api_key`` is empty
        """
        if not config.api_key:
            raise MissingApiKeyError()

        self._config = config
        self._owns_llm = llm is None
        if llm is None:
            llm = OpenAIChatClient(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout_seconds,
            )
        self._llm = llm
        self._pipeline = pipeline or PdfContentPipeline()

    @property
    def config(self) -> ExtractorConfig:
        return self._config

    @property
    def text_model(self) -> str:
        return self._config.effective_text_model

    @property
    def vision_model(self) -> str:
        return self._config.effective_vision_model

    def get_text_model(self) -> str:
        return self.text_model

    def get_vision_model(self) -> str:
        return self.vision_model

    def get_model(self) -> str:
        """Model used for text extraction."""
        return self.text_model

    def set_text_model(self, model: str) -> None:
        self._config = self._config.model_copy(update={"text_model": model})

    def set_vision_model(self, model: str) -> None:
        self._config = self._config.model_copy(update={"vision_model": model})

    def set_model(self, model: str) -> None:
        """Use one model for both text and vision extraction."""
        self._config = self._config.model_copy(
            update={"text_model": model, "vision_model": model}
        )

    async def extract(self, request: ExtractionRequest) -> ExtractionResult[Any]:
        """
        Extract structured data from a PDF.

        Args:
            request: Schema, PDF path or bytes, and call options

        Returns:
            ExtractionResult with parsed data, token usage and model used

        Raises:
            MissingSourceError: Neither or both of pdf_path / pdf_buffer given
            InvalidSchemaError: Schema rejected by the schema gate
            InvalidPdfError, PdfReadError, PdfParseError, ImageConversionError:
                PDF could not be parsed
            VisionDisabledError: Scan-like PDF with vision disabled
            EmptyModelResponseError: Model returned no content
            ExtractionFailedError: Model call or JSON parse failed
        """
        source = self._source(request)
        validate_schema(request.schema_)

        config = self._config
        parsed = await self._pipeline.parse(source, config.text_threshold)
        mode, user_message = self._build_user_message(parsed, config)

        selection = select_model(config, mode, request.temperature)
        if mode is ExtractionMode.VISION and not is_vision_capable(selection.model):
            logger.warning(
                "Model %s may not support vision input. Recommended models: gpt-4o, gpt-4o-mini",
                selection.model,
            )

        logger.info(
            "Extracting in %s mode with %s (%d pages)",
            mode.value,
            selection.model,
            parsed.page_count,
        )
        messages = self._messages(selection, user_message)
        response_schema = format_schema_for_openai(request.schema_)

        try:
            completion = await self._llm.complete(
                model=selection.model,
                messages=messages,
                response_schema=response_schema,
                temperature=selection.temperature,
                max_output_tokens=request.max_output_tokens,
            )
        except Exception as e:
            logger.error("Language model call failed: %s", e)
            raise ExtractionFailedError(
                f"Failed to extract data from PDF: {e}", _cause_details(e)
            ) from e

        if not completion.content:
            raise EmptyModelResponseError(details={"model": completion.model})

        try:
            data = json.loads(completion.content)
        except ValueError as e:
            raise ExtractionFailedError(
                f"Failed to extract data from PDF: {e}", {"model": completion.model}
            ) from e

        logger.info(
            "Extraction complete: %s, %s tokens", completion.model, completion.total_tokens
        )
        return ExtractionResult[Any](
            data=data,
            tokens_used=completion.total_tokens,
            model_used=completion.model,
            mode=mode,
            page_count=parsed.page_count,
        )

    async def aclose(self) -> None:
        """Close the language model client if this extractor created it."""
        if self._owns_llm:
            await self._llm.aclose()  # type: ignore[attr-defined]

    async def __aenter__(self) -> PdfDataExtractor:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @staticmethod
    def _source(request: ExtractionRequest) -> PdfSource:
        if (request.pdf_path is None) == (request.pdf_buffer is None):
            raise MissingSourceError()
        if request.pdf_path is not None:
            return PdfSource(path=Path(request.pdf_path))
        return PdfSource(data=request.pdf_buffer)

    @staticmethod
    def _build_user_message(
        parsed: ParsedPdf, config: ExtractorConfig
    ) -> tuple[ExtractionMode, ChatMessage]:
        content = parsed.content
        if isinstance(content, TextContent):
            return ExtractionMode.TEXT, ChatMessage(
                role="user", content=f"{TEXT_INSTRUCTION}\n\n{content.body}"
            )

        assert isinstance(content, ImageContent)
        if not config.vision_enabled:
            raise VisionDisabledError()

        if not content.pages:
            raise ExtractionFailedError(
                "PDF contains no extractable text and no page images could be produced",
                {"page_count": parsed.page_count},
            )

        parts: list[TextPart | ImagePart] = [TextPart(text=VISION_INSTRUCTION)]
        parts.extend(ImagePart.from_url(page.data_url) for page in content.pages)
        return ExtractionMode.VISION, ChatMessage(role="user", content=parts)

    @staticmethod
    def _messages(selection: ModelSelection, user_message: ChatMessage) -> list[ChatMessage]:
        if selection.system_prompt is None:
            return [user_message]
        return [ChatMessage(role="system", content=selection.system_prompt), user_message]


def _cause_details(error: Exception) -> dict[str, Any]:
    if isinstance(error, PdfSchemaError):
        return {"cause": error.code.value, **error.details}
    return {"cause": type(error).__name__}
