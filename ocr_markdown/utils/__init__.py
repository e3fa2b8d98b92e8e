from .logger import setup_logging
from .markdown import combine_pages, markdown_filename, PAGE_SEPARATOR

__all__ = ["setup_logging", "combine_pages", "markdown_filename", "PAGE_SEPARATOR"]
