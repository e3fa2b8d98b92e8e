"""
PDF OCR to Markdown — Main Entry Point

Convert a PDF directly (CLI):
    python -m ocr_markdown path/to/file.pdf [path/to/output.md]

Run as an API server (for the frontend):
    python -m ocr_markdown --serve
    # or: uvicorn ocr_markdown.api:app --reload --port 8000

Or import and run programmatically:
    from ocr_markdown.main import run
    output_path = run("path/to/file.pdf")
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

from ocr_markdown.config import Settings, get_settings
from ocr_markdown.exceptions import OcrError
from ocr_markdown.models.schemas import OcrOutput, UploadedDocument
from ocr_markdown.services import MistralClient, OcrService
from ocr_markdown.utils.logger import setup_logging
from ocr_markdown.utils.markdown import markdown_filename


def load_document(file_path: str | Path) -> UploadedDocument:
    """Read a local file into an UploadedDocument, guessing its media type."""
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    content_type, _ = mimetypes.guess_type(path.name)
    return UploadedDocument(
        filename=path.name,
        content_type=content_type,
        content=path.read_bytes(),
    )


async def convert(document: UploadedDocument, settings: Settings, transport=None) -> OcrOutput:
    """Run one document through the OCR pipeline with a fresh provider client."""
    async with MistralClient(settings, transport=transport) as client:
        return await OcrService(settings, client).process(document)


def run(file_path: str, output_path: str = "", settings: Settings | None = None, transport=None) -> Path:
    """Convert *file_path* to Markdown and write it next to the source (or to *output_path*)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    document = load_document(file_path)
    output = asyncio.run(convert(document, settings, transport=transport))

    destination = Path(output_path) if output_path else Path(file_path).with_name(
        markdown_filename(document.filename)
    )
    destination.write_text(output.markdown, encoding="utf-8")
    logger.info(f"Wrote {output.page_count} page(s) of Markdown to {destination}")
    return destination


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server (for frontend communication)."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("ocr_markdown.api:app", host=host, port=port, reload=False)


def cli(argv: list[str] | None = None) -> int:
    """Parse argv, dispatch to serve() or run(), and return the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    if "--serve" in args:
        serve()
        return 0
    if not args:
        print(__doc__)
        return 2

    try:
        run(args[0], args[1] if len(args) > 1 else "")
    except (OcrError, FileNotFoundError) as e:
        logging.getLogger(__name__).error(f"Conversion failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(cli())
