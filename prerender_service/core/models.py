"""
Request-scoped data models for the render pipeline.

None of these objects outlive a single render request.
"""
from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

from pydantic import BaseModel

from prerender_service.core.exceptions import InvalidRenderRequestError

ALLOWED_URL_SCHEMES = ("http", "https")
MARKDOWN_FORMAT_TOKENS = ("md", "markdown")
TRUTHY_TOKENS = ("true", "1", "yes", "on")

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
MARKDOWN_CONTENT_TYPE = "text/markdown; charset=utf-8"


class OutputFormat(str, Enum):
    HTML = "html"
    MARKDOWN = "markdown"


class ExtractionMode(str, Enum):
    RAW = "raw"
    READABLE = "readable"


class RenderRequest(BaseModel):
    """
    A validated render request: an absolute http(s) URL plus the output selectors.
    """
    url: str
    output_format: OutputFormat = OutputFormat.HTML
    extraction_mode: ExtractionMode = ExtractionMode.RAW

    @classmethod
    def from_query(
        cls,
        url: Optional[str],
        output_format: Optional[str] = None,
        readable: Optional[str] = None,
    ) -> 'RenderRequest':
        """
        Builds a request from raw query-string values.

        Args:
            url (Optional[str]): Target URL; must be absolute with an http or https scheme.
            output_format (Optional[str]): "md" or "markdown" (any case) selects Markdown;
                                           anything else, including None, selects HTML.
            readable (Optional[str]): "true", "1", "yes" or "on" (any case) selects
                                      readability extraction.

        Raises:
            InvalidRenderRequestError: "url parameter missing" when `url` is absent or empty,
                                       "invalid url" when it is unparsable, relative,
                                       or uses another scheme.
        """
        if not url or not url.strip():
            raise InvalidRenderRequestError("url parameter missing")

        try:
            parts = urlsplit(url.strip())
            # Accessing .port validates the port component.
            parts.port
        except ValueError:
            raise InvalidRenderRequestError("invalid url")
        if parts.scheme.lower() not in ALLOWED_URL_SCHEMES or not parts.hostname:
            raise InvalidRenderRequestError("invalid url")

        fmt = OutputFormat.HTML
        if output_format and output_format.strip().lower() in MARKDOWN_FORMAT_TOKENS:
            fmt = OutputFormat.MARKDOWN

        mode = ExtractionMode.RAW
        if readable and readable.strip().lower() in TRUTHY_TOKENS:
            mode = ExtractionMode.READABLE

        return cls(url=parts.geturl(), output_format=fmt, extraction_mode=mode)


class RenderedPage(BaseModel):
    """What a browsing context yields once the page has settled and been cleaned."""
    url: str
    final_url: str
    title: Optional[str] = None
    html: str


class Article(BaseModel):
    """Main content isolated by the readability extractor."""
    title: Optional[str] = None
    content: str
    text_content: str


class RenderResult(BaseModel):
    """Final payload handed back to the HTTP layer."""
    content_type: str
    body: str
