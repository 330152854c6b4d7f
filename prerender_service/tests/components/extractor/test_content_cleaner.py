import re

import pytest

from prerender_service.components.extractor.content_cleaner import ContentCleaner, REMOVED_TAGS, clean_markup
from prerender_service.core.exceptions import ExtractorError

NOISE_TAG_PATTERN = re.compile(r"<\s*(script|style|noscript|template|link|meta|head)\b", re.IGNORECASE)

FULL_DOCUMENT = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Shop</title>
  <link rel="stylesheet" href="/app.css">
  <script src="/bundle.js"></script>
</head>
<body>
  <header><h1>Shop</h1></header>
  <main>
    <p>Price: <strong>$10</strong></p>
    <template id="row"><tr><td>template row</td></tr></template>
    <div><style>.x { display: none; }</style><p>Nested <span>content</span></p></div>
  </main>
  <noscript><img src="/pixel.gif"></noscript>
  <script>window.__STATE__ = {"a": 1};</script>
</body>
</html>"""


def test_removed_tags_constant():
    assert REMOVED_TAGS == {"script", "style", "noscript", "template", "link", "meta", "head"}


def test_clean_markup_returns_body_inner_markup_without_noise():
    cleaned = clean_markup(FULL_DOCUMENT)

    assert NOISE_TAG_PATTERN.search(cleaned) is None
    assert not cleaned.startswith("<body")
    assert "<h1>Shop</h1>" in cleaned
    assert "<strong>$10</strong>" in cleaned
    assert "<p>Nested <span>content</span></p>" in cleaned
    assert "template row" not in cleaned
    assert "__STATE__" not in cleaned
    assert "pixel.gif" not in cleaned


def test_clean_markup_without_body_uses_whole_document():
    cleaned = clean_markup("<div><script>x()</script><p>fragment</p></div>")
    assert cleaned == "<div><p>fragment</p></div>"


def test_clean_markup_empty_document():
    assert clean_markup("") == ""


def test_clean_markup_none_raises():
    with pytest.raises(ExtractorError) as excinfo:
        clean_markup(None)
    assert "cannot be None" in str(excinfo.value)


def test_clean_markup_custom_tag_set():
    cleaned = clean_markup("<body><nav>menu</nav><script>x()</script><p>keep</p></body>", removed_tags=["nav"])
    assert "menu" not in cleaned
    assert "<script>" in cleaned
    assert "<p>keep</p>" in cleaned


def test_content_cleaner_uses_configured_tags():
    class Config:
        def get(self, key, default=None):
            return ["aside"] if key == "components.content_cleaner.removed_tags" else default

    cleaner = ContentCleaner(config=Config())
    assert cleaner.clean("<body><aside>ad</aside><p>text</p></body>") == "<p>text</p>"
