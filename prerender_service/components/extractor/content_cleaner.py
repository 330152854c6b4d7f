"""
Noise-element removal for rendered documents, using BeautifulSoup.

After the page has settled, its scripts have already run and its stylesheets were
never loaded, so the corresponding tags are inert. `clean_markup` removes them and
returns the inner markup of `<body>`, which is the canonical HTML output of the service.
"""
from typing import FrozenSet, Iterable, Optional

from bs4 import BeautifulSoup

from prerender_service.core.exceptions import ExtractorError

REMOVED_TAGS: FrozenSet[str] = frozenset({"script", "style", "noscript", "template", "link", "meta", "head"})


def clean_markup(html_content: str, removed_tags: Optional[Iterable[str]] = None) -> str:
    """
    Strips noise elements from a serialized document and returns the body's inner markup.

    Args:
        html_content (str): Full document markup, as returned by `page.content()`.
        removed_tags (Optional[Iterable[str]]): Tag names to remove entirely, including
                                                their children. Defaults to `REMOVED_TAGS`.

    Returns:
        str: The inner markup of `<body>`, or of the whole document if it has no body.

    Raises:
        ExtractorError: If `html_content` is None or cannot be parsed.
    """
    if html_content is None:
        raise ExtractorError("HTML content cannot be None for clean_markup.")

    try:
        soup = BeautifulSoup(html_content, 'html.parser')
    except Exception as e:
        raise ExtractorError(f"Failed to parse rendered document: {e}")

    tags = list(removed_tags) if removed_tags is not None else sorted(REMOVED_TAGS)
    for element in soup.find_all(tags):
        # A tag nested inside an already removed one is gone with its parent.
        if element.decomposed:
            continue
        element.decompose()

    root = soup.body if soup.body is not None else soup
    return "".join(str(child) for child in root.contents).strip()


class ContentCleaner:
    """Configured wrapper around `clean_markup`."""
    def __init__(self, config=None):
        self.removed_tags: FrozenSet[str] = REMOVED_TAGS
        if config:
            self.removed_tags = frozenset(config.get('components.content_cleaner.removed_tags', REMOVED_TAGS))

    def clean(self, html_content: str) -> str:
        return clean_markup(html_content, self.removed_tags)
