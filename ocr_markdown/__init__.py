"""PDF → Markdown via the Mistral OCR API."""

__version__ = "0.1.0"
