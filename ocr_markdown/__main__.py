"""Allow running as: python -m ocr_markdown"""

import sys

from ocr_markdown.main import cli

if __name__ == "__main__":
    sys.exit(cli())
