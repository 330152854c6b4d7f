"""
Converter component for the Prerender Service: HTML to Markdown.
"""
from .markdown_converter import MarkdownConverter, to_markdown

__all__ = [
    "MarkdownConverter",
    "to_markdown",
]
