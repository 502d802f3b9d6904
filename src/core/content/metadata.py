"""
Title and byline extraction from article markup.

Kept apart from the analyzer: the analyzer's placeholder title/author are
only replaced when a caller opts in and passes the result along.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from ..models import ArticleMetadata
from ..text_sanitizer import normalize_article_text

logger = logging.getLogger(__name__)

TITLE_META = [
    {"property": "og:title"},
    {"name": "twitter:title"},
    {"name": "title"},
]

AUTHOR_META = [
    {"name": "author"},
    {"property": "og:article:author"},
    {"property": "article:author"},
]

# WeChat article page elements
TITLE_SELECTORS = ['#activity-name', '.rich_media_title', 'h1']
AUTHOR_SELECTORS = ['#js_name', '.rich_media_meta_nickname', '#js_author_name']


def _meta_content(soup: BeautifulSoup, candidates) -> Optional[str]:
    for attrs in candidates:
        tag = soup.find("meta", attrs)
        if tag and tag.get("content"):
            value = normalize_article_text(tag["content"])
            if value:
                return value
    return None


def _selector_text(soup: BeautifulSoup, selectors) -> Optional[str]:
    for selector in selectors:
        element = soup.select_one(selector)
        if element:
            value = normalize_article_text(element.get_text())
            if value:
                return value
    return None


class MetadataExtractor:
    """Reads article title and author from page markup."""

    def extract(self, markup: str) -> ArticleMetadata:
        if not isinstance(markup, str) or not markup.strip():
            return ArticleMetadata()

        soup = BeautifulSoup(markup, 'html.parser')

        title = _meta_content(soup, TITLE_META) or _selector_text(soup, TITLE_SELECTORS)
        if not title and soup.title and soup.title.string:
            title = normalize_article_text(soup.title.string) or None

        author = _meta_content(soup, AUTHOR_META) or _selector_text(soup, AUTHOR_SELECTORS)

        logger.debug(f"Extracted metadata: title={title!r}, author={author!r}")
        return ArticleMetadata(title=title, author=author)
