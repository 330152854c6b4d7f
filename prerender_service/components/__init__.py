"""
Components sub-package for the Prerender Service.

This package contains the render pipeline building blocks: the browser
supervisor and browsing contexts (renderer), content cleaning and readability
extraction (extractor), and Markdown conversion (converter).
"""

from .renderer.browser_supervisor import BrowserSupervisor
from .renderer.context_manager import BrowsingContextManager
from .renderer.resource_filter import ResourceFilter, should_block
from .extractor.content_cleaner import ContentCleaner, clean_markup
from .extractor.readability_extractor import ReadabilityExtractor
from .converter.markdown_converter import MarkdownConverter, to_markdown

__all__ = [
    "BrowserSupervisor",
    "BrowsingContextManager",
    "ResourceFilter",
    "should_block",
    "ContentCleaner",
    "clean_markup",
    "ReadabilityExtractor",
    "MarkdownConverter",
    "to_markdown",
]
