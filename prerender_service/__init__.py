"""
Prerender Service: server-side rendering of JavaScript-heavy pages with a
shared headless Chromium, returning cleaned HTML, readability articles, or Markdown.
"""

__version__ = "0.1.0"
