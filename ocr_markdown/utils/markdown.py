"""
Markdown helpers shared by the API, the CLI and the tests.
"""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Iterable

from ocr_markdown.models.schemas import OcrPage

PAGE_SEPARATOR = "\n\n---\n\n"
DEFAULT_MARKDOWN_FILENAME = "output.md"

_PDF_SUFFIX_RE = re.compile(r"\.pdf$", re.IGNORECASE)


def combine_pages(pages: Iterable[OcrPage]) -> str:
    """Join page Markdown in ascending page index with ``PAGE_SEPARATOR``."""
    ordered = sorted(pages, key=lambda page: page.index)
    return PAGE_SEPARATOR.join(page.markdown for page in ordered)


def markdown_filename(source_name: str | None) -> str:
    """
    Name of the downloadable ``.md`` file for *source_name*.

    ``report.PDF`` → ``report.md``; a name with another extension has it
    replaced; an empty name falls back to ``output.md``.
    """
    name = PurePath(source_name or "").name
    if not name:
        return DEFAULT_MARKDOWN_FILENAME
    if _PDF_SUFFIX_RE.search(name):
        return _PDF_SUFFIX_RE.sub(".md", name)
    stem = PurePath(name).stem or name
    return f"{stem}.md"
