"""
Data schemas for the OCR pipeline.

Everything here is request scoped: each upload builds its own set of
objects and discards them once the response is sent.
"""

from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

PDF_MEDIA_TYPE = "application/pdf"


# ── Inbound document ─────────────────────────────────────


class UploadedDocument(BaseModel):
    """The PDF the user picked, as received by the API or read by the CLI."""
    filename: str = ""
    content_type: Optional[str] = None
    content: bytes = b""

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_MEDIA_TYPE


# ── Provider objects ─────────────────────────────────────


class RemoteFile(BaseModel):
    """File handle returned by ``POST /files``."""
    id: str
    object: str = "file"
    size_bytes: int = 0
    created_at: int = 0
    filename: str = ""
    purpose: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")


class SignedUrl(BaseModel):
    """Short-lived read URL returned by ``GET /files/{id}/url``."""
    url: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class OcrPage(BaseModel):
    index: int
    markdown: str = ""
    images: list[Any] = []
    dimensions: Any = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class OcrResult(BaseModel):
    """Response body of ``POST /ocr``."""
    pages: list[OcrPage] = []
    model: str = ""
    usage_info: Any = None

    model_config = ConfigDict(frozen=True, extra="ignore")


# ── Pipeline output ──────────────────────────────────────


class OcrOutput(BaseModel):
    markdown: str
    page_count: int = 0


# ── HTTP payloads ────────────────────────────────────────


class OcrResponse(BaseModel):
    markdown: str
    page_count: int = 0


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    api_key_configured: bool
