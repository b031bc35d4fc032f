"""
Parsing Models - Data types for the PDF content pipeline.
"""

from __future__ import annotations

import base64
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from pdfschema.config.errors import MissingSourceError

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


class SourceKind(str, Enum):
    """How the caller supplied the PDF."""

    PATH = "path"
    BYTES = "bytes"


class ContentKind(str, Enum):
    """Routing decision for a parsed PDF."""

    TEXT = "text"
    IMAGE = "image"


class PdfSource(BaseModel):
    """A PDF given either as a filesystem path or as raw bytes."""

    path: Path | None = None
    data: bytes | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def exactly_one_source(self) -> PdfSource:
        """Reject sources with neither or both forms set."""
        if (self.path is None) == (self.data is None):
            raise MissingSourceError(
                "Exactly one of path or data must be provided for a PDF source"
            )
        return self

    @property
    def kind(self) -> SourceKind:
        return SourceKind.PATH if self.path is not None else SourceKind.BYTES

    @classmethod
    def of(cls, value: PdfSource | bytes | str | Path) -> PdfSource:
        """Coerce bytes, a path, or an existing source into a PdfSource."""
        if isinstance(value, PdfSource):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(data=bytes(value))
        return cls(path=Path(value))


class PageImage(BaseModel):
    """A single rasterized page, PNG-encoded."""

    page_number: int = Field(ge=1)
    image_bytes: bytes

    model_config = {"frozen": True}

    @property
    def data_url(self) -> str:
        """Page image as a ``data:image/png;base64,...`` URL."""
        encoded = base64.b64encode(self.image_bytes).decode("ascii")
        return f"{PNG_DATA_URL_PREFIX}{encoded}"


class TextContent(BaseModel):
    """Text-bearing PDF: the trimmed embedded text."""

    kind: Literal["text"] = "text"
    body: str

    model_config = {"frozen": True}

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("text body must not be empty")
        return value


class ImageContent(BaseModel):
    """Scan-like PDF: page images in source page order."""

    kind: Literal["images"] = "images"
    pages: list[PageImage] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("pages")
    @classmethod
    def pages_in_order(cls, value: list[PageImage]) -> list[PageImage]:
        numbers = [page.page_number for page in value]
        if numbers != sorted(set(numbers)):
            raise ValueError("page images must be unique and in page order")
        return value

    @property
    def page_numbers(self) -> list[int]:
        return [page.page_number for page in self.pages]


ParsedContent = Annotated[TextContent | ImageContent, Field(discriminator="kind")]


class ParsedPdf(BaseModel):
    """Result of parsing a PDF: routed content plus document facts."""

    content: ParsedContent
    page_count: int = Field(ge=1)
    metadata: dict[str, Any] | None = None

    model_config = {"frozen": True}

    @property
    def is_text(self) -> bool:
        return isinstance(self.content, TextContent)


class TextExtraction(BaseModel):
    """Output of a text-extraction capability."""

    text: str = ""
    page_count: int = Field(ge=0)
    metadata: dict[str, Any] = Field(default_factory=dict)


class PageFailure(BaseModel):
    """A page that could not be rasterized."""

    page_number: int = Field(ge=1)
    error: str
    backend_unavailable: bool = False


class RasterizationReport(BaseModel):
    """Per-page outcome of rasterizing a document."""

    pages: list[PageImage] = Field(default_factory=list)
    failures: list[PageFailure] = Field(default_factory=list)

    @property
    def backend_unavailable(self) -> bool:
        """True when every failure points at missing rasterization tooling."""
        return bool(self.failures) and all(f.backend_unavailable for f in self.failures)

    def describe_failures(self) -> str:
        return "; ".join(f"page {f.page_number}: {f.error}" for f in self.failures)
