"""
Test Configuration and Fixtures
"""

from __future__ import annotations

import pytest

from ocr_markdown.config import Settings
from ocr_markdown.exceptions import ProviderError
from ocr_markdown.models.schemas import (
    OcrPage,
    OcrResult,
    RemoteFile,
    SignedUrl,
    UploadedDocument,
)

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and .env, with no real waiting."""
    values = {
        "mistral_api_key": "test-key",
        "mistral_base_url": "https://mistral.test/v1",
        "upload_settle_seconds": 0.0,
        "signed_url_backoff_seconds": 0.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeProvider:
    """
    In-memory stand-in for MistralClient.

    Records every remote call in ``calls`` as ``(method_name, args)``.
    Failures are configured per step; ``signed_url_errors`` is consumed one
    error per call. ``ocr_request_error`` fails the OCR request itself (e.g.
    a timeout), ``ocr_error`` fails when the OCR response is read.
    ``calls_before_read`` snapshots the remote calls made by then.
    """

    def __init__(
        self,
        pages: list[OcrPage] | None = None,
        upload_error: Exception | None = None,
        signed_url_errors: list[Exception] | None = None,
        ocr_request_error: Exception | None = None,
        ocr_error: Exception | None = None,
        delete_error: Exception | None = None,
        file_id: str = "file-123",
    ):
        self.pages = pages if pages is not None else [
            OcrPage(index=0, markdown="# Page one"),
            OcrPage(index=1, markdown="Page two body"),
        ]
        self.upload_error = upload_error
        self.signed_url_errors = list(signed_url_errors or [])
        self.ocr_request_error = ocr_request_error
        self.ocr_error = ocr_error
        self.delete_error = delete_error
        self.file_id = file_id
        self.calls: list[tuple[str, tuple]] = []
        self.calls_before_read: list[str] | None = None

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def upload_file(self, filename, content):
        self.calls.append(("upload_file", (filename, content)))
        if self.upload_error:
            raise self.upload_error
        return RemoteFile(id=self.file_id, filename=filename, purpose="ocr", size_bytes=len(content))

    async def get_signed_url(self, file_id, expiry_hours=None):
        self.calls.append(("get_signed_url", (file_id, expiry_hours)))
        if self.signed_url_errors:
            raise self.signed_url_errors.pop(0)
        return SignedUrl(url=f"https://signed.test/{file_id}")

    async def delete_file(self, file_id):
        self.calls.append(("delete_file", (file_id,)))
        if self.delete_error:
            raise self.delete_error

    async def request_ocr(self, document_url, model, include_image_base64=False):
        self.calls.append(("request_ocr", (document_url, model, include_image_base64)))
        if self.ocr_request_error:
            raise self.ocr_request_error
        return {"model": model}

    def read_ocr_result(self, response):
        self.calls_before_read = self.names()
        if self.ocr_error:
            raise self.ocr_error
        return OcrResult(pages=self.pages, model=response["model"])


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def provider_error(step: str, status: int = 500, body: str = "boom") -> ProviderError:
    return ProviderError(step, status, body)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def pdf_document() -> UploadedDocument:
    return UploadedDocument(filename="scan.pdf", content_type="application/pdf", content=PDF_BYTES)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
