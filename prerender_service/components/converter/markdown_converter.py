"""
HTML to Markdown conversion using markdownify.

Headings are emitted with ATX markers (`#`, `##`, ...). The conversion is a pure
function of its input; noise elements are expected to have been removed already.
"""
import re

from markdownify import ATX, markdownify

from prerender_service.core.exceptions import ConverterError
from prerender_service.core.logger import get_logger

logger = get_logger(__name__)

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def to_markdown(html: str) -> str:
    """
    Converts HTML (a full document or a fragment) to Markdown.

    Runs of three or more newlines are collapsed to a single blank line and
    leading/trailing whitespace is stripped.

    Raises:
        ConverterError: If markdownify fails on the input.
    """
    if not html:
        return ""
    try:
        markdown = markdownify(html, heading_style=ATX, bullets="-")
    except Exception as e:
        logger.error(f"Markdown conversion failed: {e}", exc_info=True)
        raise ConverterError(f"Markdown conversion failed: {e}")
    return _EXCESS_BLANK_LINES.sub("\n\n", markdown).strip()


class MarkdownConverter:
    """Pipeline-stage wrapper around `to_markdown`."""
    def convert(self, html: str) -> str:
        return to_markdown(html)
