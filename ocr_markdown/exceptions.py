"""
Error types raised by the OCR pipeline.

Every error carries a human-readable message and the HTTP status code the
API layer responds with: 400 for bad input, 500 for everything else.
"""

from __future__ import annotations

INVALID_FILE_MESSAGE = "Invalid file type. Please upload a PDF."


class OcrError(Exception):
    """Base class for errors surfaced to the caller as ``{"error": message}``."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class DocumentValidationError(OcrError):
    """Missing, empty, oversized or non-PDF upload."""

    status_code = 400


class ConfigurationError(OcrError):
    """Server-side configuration (e.g. the provider API key) is missing."""

    status_code = 500


class ProviderError(OcrError):
    """A call to the OCR provider failed."""

    status_code = 500

    def __init__(self, step: str, status: int | None = None, body: str = ""):
        self.step = step
        self.provider_status = status
        self.body = body
        detail = " ".join(str(part) for part in (status, body) if part not in (None, ""))
        message = f"Mistral {step} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ProviderTimeoutError(ProviderError):
    """A call to the OCR provider exceeded its timeout."""

    def __init__(self, step: str, timeout: float):
        self.step = step
        self.provider_status = None
        self.body = ""
        self.timeout = timeout
        OcrError.__init__(self, f"Mistral {step} timed out after {timeout:g}s")
