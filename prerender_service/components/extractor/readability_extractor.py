"""
Main-content extraction using readability-lxml.

`ReadabilityExtractor.extract_readable` isolates the article region of a cleaned
document and returns it as HTML along with a plain-text rendition and a title.
Pages where no article region of useful size can be found raise `ExtractorError`;
there is no fallback to the unextracted markup.
"""
from typing import Optional, TYPE_CHECKING

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from prerender_service.core.exceptions import ExtractorError
from prerender_service.core.logger import get_logger
from prerender_service.core.models import Article

if TYPE_CHECKING:
    from prerender_service.core.config import ConfigurationManager

logger = get_logger(__name__)

DEFAULT_MIN_TEXT_LENGTH = 100
# readability-lxml's title() placeholder for documents without a <title>.
_NO_TITLE = "[no-title]"


class ReadabilityExtractor:
    """
    Readability-style article extraction.

    Attributes:
        min_text_length (int): Minimum length of the article's plain text for the
                               extraction to be accepted.
    """
    def __init__(self, config: Optional['ConfigurationManager'] = None):
        self.min_text_length = DEFAULT_MIN_TEXT_LENGTH
        if config:
            self.min_text_length = int(config.get('components.extractor.min_text_length', DEFAULT_MIN_TEXT_LENGTH))

    def extract_readable(self, html: str, base_url: str, fallback_title: Optional[str] = None) -> Article:
        """
        Extracts the main article from cleaned HTML.

        Args:
            html (str): Cleaned document or body markup.
            base_url (str): URL the document was loaded from; relative links and media
                            references in the article are resolved against it.
            fallback_title (Optional[str]): Title to use when the markup carries no
                                            `<title>` (cleaned markup has its head removed).

        Returns:
            Article: The article's title, HTML content and text content.

        Raises:
            ExtractorError: If the document cannot be parsed or the extracted text is
                            shorter than `min_text_length`.
        """
        if not html or not html.strip():
            raise ExtractorError("No content to extract an article from.")

        try:
            doc = Document(html, url=base_url)
            content = doc.summary(html_partial=True)
            title = doc.short_title()
        except Unparseable as e:
            logger.warning(f"Readability could not parse document from {base_url}: {e}")
            raise ExtractorError(f"Readability could not parse the document: {e}")

        text_content = BeautifulSoup(content, 'html.parser').get_text(separator=" ", strip=True)
        if len(text_content) < self.min_text_length:
            logger.warning(
                f"Readability found only {len(text_content)} characters of main content at {base_url} "
                f"(minimum {self.min_text_length})."
            )
            raise ExtractorError("Could not identify a main content region.")

        if not title or title == _NO_TITLE:
            title = fallback_title

        logger.info(f"Extracted article from {base_url}: title={title!r}, {len(text_content)} characters.")
        return Article(title=title, content=content, text_content=text_content)
