"""Services — MistralClient (provider HTTP calls) and OcrService (pipeline)."""

from ocr_markdown.services.mistral_client import MistralClient
from ocr_markdown.services.ocr_service import OcrService

__all__ = ["MistralClient", "OcrService"]
