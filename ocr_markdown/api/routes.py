"""
API routes — thin HTTP layer that delegates to OcrService.

Routes:
  GET  /health   → API health check
  POST /api/ocr  → Upload a PDF, get back combined Markdown
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from ocr_markdown.config import Settings, get_settings
from ocr_markdown.models.schemas import (
    ErrorResponse,
    HealthResponse,
    OcrResponse,
    UploadedDocument,
)
from ocr_markdown.services import MistralClient, OcrService

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
ocr_router = APIRouter()


# ── Dependencies ─────────────────────────────────────────

async def get_ocr_service(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[OcrService]:
    """One provider client per request, closed once the response is built."""
    async with MistralClient(settings) as client:
        yield OcrService(settings, client)


# ── Health ───────────────────────────────────────────────

@health_router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        api_key_configured=settings.api_key_configured,
    )


# ── OCR ──────────────────────────────────────────────────

@ocr_router.post(
    "/ocr",
    response_model=OcrResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid upload"},
        500: {"model": ErrorResponse, "description": "OCR failed"},
    },
)
async def ocr_pdf(
    file: Optional[UploadFile] = File(None),
    service: OcrService = Depends(get_ocr_service),
):
    """
    Convert an uploaded PDF to Markdown.

    Errors are raised as OcrError subclasses and rendered as
    ``{"error": message}`` by the handler registered in create_app().
    """
    document = None
    if file is not None:
        document = UploadedDocument(
            filename=file.filename or "",
            content_type=file.content_type,
            content=await file.read(),
        )

    output = await service.process(document)
    return OcrResponse(markdown=output.markdown, page_count=output.page_count)
