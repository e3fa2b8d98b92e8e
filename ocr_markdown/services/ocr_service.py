"""
OCR Service — drives one PDF through the provider pipeline.

    validate → upload → settle → signed URL → OCR → delete → combine

Strictly sequential; each step starts only after the previous one
succeeded. Once the upload exists it is deleted exactly once, whatever
happens afterwards, and a failed delete is logged but never reported.
The OCR response is only evaluated after that delete has run.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Protocol

from ocr_markdown.config import Settings
from ocr_markdown.exceptions import (
    INVALID_FILE_MESSAGE,
    ConfigurationError,
    DocumentValidationError,
    ProviderError,
)
from ocr_markdown.models.schemas import (
    OcrOutput,
    OcrResult,
    RemoteFile,
    SignedUrl,
    UploadedDocument,
)
from ocr_markdown.utils.markdown import combine_pages

logger = logging.getLogger(__name__)

NOT_READY_STATUS = 404


class OcrProvider(Protocol):
    """The provider calls the pipeline needs (MistralClient or a test double)."""

    async def upload_file(self, filename: str, content: bytes) -> RemoteFile: ...

    async def get_signed_url(self, file_id: str, expiry_hours: int | None = None) -> SignedUrl: ...

    async def delete_file(self, file_id: str) -> None: ...

    async def request_ocr(self, document_url: str, model: str, include_image_base64: bool = False) -> Any: ...

    def read_ocr_result(self, response: Any) -> OcrResult: ...


class OcrService:
    """Stateless orchestrator; safe to share between concurrent requests."""

    def __init__(
        self,
        settings: Settings,
        provider: OcrProvider,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings
        self.provider = provider
        self._sleep = sleep

    async def process(self, document: UploadedDocument | None) -> OcrOutput:
        """Run the full pipeline and return the combined Markdown."""
        self._check_configuration()
        self.validate(document)

        t0 = time.perf_counter()
        logger.info(
            f"Received file: {document.filename}, size: {document.size}, type: {document.content_type}"
        )

        remote = await self.provider.upload_file(document.filename, document.content)
        logger.info(f"File uploaded successfully: {remote.id}")

        try:
            signed = await self._wait_for_signed_url(remote.id)
        except Exception:
            await self._delete_quietly(remote.id)
            raise
        logger.info(f"Signed URL obtained for {remote.id}")

        try:
            response = await self.provider.request_ocr(
                signed.url,
                model=self.settings.ocr_model,
                include_image_base64=self.settings.include_image_base64,
            )
        finally:
            await self._delete_quietly(remote.id)
        result = self.provider.read_ocr_result(response)

        markdown = combine_pages(result.pages)
        elapsed = time.perf_counter() - t0
        logger.info(
            f"OCR processing successful: {len(result.pages)} page(s), "
            f"{len(markdown)} chars in {elapsed:.2f}s"
        )
        return OcrOutput(markdown=markdown, page_count=len(result.pages))

    def validate(self, document: UploadedDocument | None) -> None:
        """Reject anything that is not a non-empty PDF within the size limit."""
        if document is None or not document.filename or not document.is_pdf:
            raise DocumentValidationError(INVALID_FILE_MESSAGE)
        if document.size == 0:
            raise DocumentValidationError("The uploaded PDF is empty.")
        limit = self.settings.max_upload_mb * 1024 * 1024
        if document.size > limit:
            raise DocumentValidationError(
                f"The uploaded PDF exceeds the {self.settings.max_upload_mb} MB limit."
            )

    # ── Internals ────────────────────────────────────────

    def _check_configuration(self) -> None:
        if not self.settings.api_key_configured:
            logger.error("MISTRAL_API_KEY environment variable is not set.")
            raise ConfigurationError("API key not configured.")

    async def _wait_for_signed_url(self, file_id: str) -> SignedUrl:
        """
        Give the provider time to finish ingesting the upload, then fetch
        the signed URL. A 404 means "not visible yet" and is polled with
        exponential backoff up to ``signed_url_max_attempts``; any other
        failure is final.
        """
        await self._sleep(self.settings.upload_settle_seconds)

        attempts = max(1, self.settings.signed_url_max_attempts)
        delay = self.settings.signed_url_backoff_seconds
        for attempt in range(1, attempts):
            try:
                return await self._get_signed_url(file_id)
            except ProviderError as e:
                if e.provider_status != NOT_READY_STATUS:
                    raise
                logger.warning(
                    f"File {file_id} not ready on attempt {attempt}/{attempts}; "
                    f"retrying in {delay:g}s"
                )
                await self._sleep(delay)
                delay *= 2
        return await self._get_signed_url(file_id)

    async def _get_signed_url(self, file_id: str) -> SignedUrl:
        return await self.provider.get_signed_url(
            file_id, expiry_hours=self.settings.signed_url_expiry_hours,
        )

    async def _delete_quietly(self, file_id: str) -> None:
        try:
            await self.provider.delete_file(file_id)
        except Exception as e:
            logger.warning(f"Failed to delete uploaded file {file_id}: {e}")
        else:
            logger.info(f"Successfully deleted uploaded file: {file_id}")
