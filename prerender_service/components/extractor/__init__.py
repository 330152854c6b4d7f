"""
Extractor component for the Prerender Service.

This sub-package removes noise elements from rendered documents and isolates
the main article with a readability heuristic.
"""
from .content_cleaner import ContentCleaner, clean_markup, REMOVED_TAGS
from .readability_extractor import ReadabilityExtractor

__all__ = [
    "ContentCleaner",
    "clean_markup",
    "REMOVED_TAGS",
    "ReadabilityExtractor",
]
