"""
Mistral Client — thin async wrapper over the provider's files + OCR API.

Calls:
  POST   /files            → upload the PDF (purpose=ocr)
  GET    /files/{id}/url   → short-lived signed URL for the upload
  DELETE /files/{id}       → remove the upload
  POST   /ocr              → run OCR on a document URL

Every call has an explicit timeout. Non-2xx responses raise ProviderError,
timeouts raise ProviderTimeoutError. OCR is split in two: request_ocr()
returns the raw response and read_ocr_result() evaluates it, so the caller
can clean up the upload in between. The client holds no per-request state.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ocr_markdown.config import Settings
from ocr_markdown.exceptions import ProviderError, ProviderTimeoutError
from ocr_markdown.models.enums import PipelineStep
from ocr_markdown.models.schemas import OcrResult, RemoteFile, SignedUrl, PDF_MEDIA_TYPE

logger = logging.getLogger(__name__)

OCR_PURPOSE = "ocr"


class MistralClient:
    """Async HTTP client for the Mistral files and OCR endpoints."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._request_timeout = settings.request_timeout_seconds
        self._ocr_timeout = settings.ocr_timeout_seconds
        self._http = httpx.AsyncClient(
            base_url=settings.mistral_base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {settings.mistral_api_key}",
                "Accept": "application/json",
            },
            timeout=self._request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> MistralClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Endpoints ────────────────────────────────────────

    async def upload_file(self, filename: str, content: bytes) -> RemoteFile:
        response = await self._send(
            PipelineStep.UPLOAD,
            "POST",
            "/files",
            data={"purpose": OCR_PURPOSE},
            files={"file": (filename, content, PDF_MEDIA_TYPE)},
        )
        return self._parse(PipelineStep.UPLOAD, response, RemoteFile)

    async def get_signed_url(self, file_id: str, expiry_hours: int | None = None) -> SignedUrl:
        params = {"expiry": expiry_hours} if expiry_hours else None
        response = await self._send(
            PipelineStep.SIGNED_URL, "GET", f"/files/{file_id}/url", params=params,
        )
        return self._parse(PipelineStep.SIGNED_URL, response, SignedUrl)

    async def delete_file(self, file_id: str) -> None:
        await self._send(PipelineStep.DELETE, "DELETE", f"/files/{file_id}")

    async def request_ocr(
        self,
        document_url: str,
        model: str,
        include_image_base64: bool = False,
    ) -> httpx.Response:
        """Send the OCR request; the status is checked by read_ocr_result()."""
        payload: dict[str, Any] = {
            "model": model,
            "document": {
                "type": "document_url",
                "document_url": document_url,
            },
            "include_image_base64": include_image_base64,
        }
        return await self._send(
            PipelineStep.OCR, "POST", "/ocr",
            json=payload, timeout=self._ocr_timeout, check_status=False,
        )

    @classmethod
    def read_ocr_result(cls, response: httpx.Response) -> OcrResult:
        cls._check_status(PipelineStep.OCR, response)
        return cls._parse(PipelineStep.OCR, response, OcrResult)

    # ── Internals ────────────────────────────────────────

    async def _send(
        self,
        step: PipelineStep,
        method: str,
        url: str,
        timeout: float | None = None,
        check_status: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        effective_timeout = timeout or self._request_timeout
        try:
            response = await self._http.request(method, url, timeout=effective_timeout, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Mistral {step.value} timed out after {effective_timeout:g}s: {e!r}")
            raise ProviderTimeoutError(step.value, effective_timeout) from e
        except httpx.HTTPError as e:
            logger.error(f"Mistral {step.value} transport error: {e!r}")
            raise ProviderError(step.value, body=str(e) or type(e).__name__) from e

        if check_status:
            self._check_status(step, response)
        return response

    @staticmethod
    def _check_status(step: PipelineStep, response: httpx.Response) -> None:
        if response.is_error:
            body = response.text
            logger.error(f"Mistral {step.value} failed: {response.status_code} {body}")
            raise ProviderError(step.value, response.status_code, body)

    @staticmethod
    def _parse(step: PipelineStep, response: httpx.Response, model):
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Mistral {step.value} returned an unexpected body: {e}")
            raise ProviderError(step.value, response.status_code, "unexpected response body") from e
