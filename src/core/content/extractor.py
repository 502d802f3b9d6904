"""
Main-content extraction from article markup.

The content region is located with an ordered list of matchers, most
specific (WeChat's own containers) first. The first matcher yielding
non-blank text wins; nothing is merged across matchers.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from ..exceptions import ExtractionError
from ..text_sanitizer import normalize_article_text

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 100

# Elements whose text is never article content
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]

# Most specific first
CONTENT_SELECTORS = (
    '#js_content',
    '.rich_media_content',
    '.article-content',
    'article',
    '[class*="content"]',
)

Matcher = Callable[[BeautifulSoup], Optional[str]]


def selector_matcher(selector: str) -> Matcher:
    """Build a matcher returning the text of the first element matching ``selector``."""
    def match(soup: BeautifulSoup) -> Optional[str]:
        # Only the first element per selector is considered; an empty first hit
        # moves on to the next selector, not to later hits of this one.
        element = soup.select_one(selector)
        if element is None:
            return None
        return element.get_text()

    match.__name__ = f"select({selector})"
    match.label = selector
    return match


def default_matchers() -> List[Matcher]:
    return [selector_matcher(selector) for selector in CONTENT_SELECTORS]


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized article text plus where it was found."""
    text: str
    matched_by: str


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse markup into a tree with non-content elements removed."""
    soup = BeautifulSoup(markup, 'html.parser')
    for element in soup(NON_CONTENT_TAGS):
        element.decompose()
    return soup


class ContentExtractor:
    """Turns raw article markup into normalized plain text."""

    def __init__(self, matchers: Optional[Sequence[Matcher]] = None, min_length: int = MIN_CONTENT_LENGTH):
        """
        Initialize extractor.

        Args:
            matchers: Ordered content matchers (defaults to CONTENT_SELECTORS)
            min_length: Shortest text accepted as an article
        """
        self.matchers = list(matchers) if matchers is not None else default_matchers()
        self.min_length = min_length

    def extract(self, markup: str) -> str:
        """
        Extract normalized article text.

        Raises:
            ExtractionError: If no text is found or it is shorter than min_length
        """
        return self.extract_with_details(markup).text

    def extract_with_details(self, markup: str) -> ExtractionResult:
        """Like ``extract`` but also reports which matcher produced the text."""
        if not isinstance(markup, str):
            raise ExtractionError(ExtractionError.INVALID_MARKUP)

        soup = parse_markup(markup)
        raw_text, matched_by = self._locate_content(soup)
        text = normalize_article_text(raw_text)

        if not text:
            logger.warning("No text found in article markup")
            raise ExtractionError(ExtractionError.NO_CONTENT)

        if len(text) < self.min_length:
            logger.warning(f"Extracted content too short ({len(text)} chars, matched by {matched_by})")
            raise ExtractionError(ExtractionError.TOO_SHORT, length=len(text), min_length=self.min_length)

        logger.info(f"Extracted {len(text)} chars of article text (matched by {matched_by})")
        return ExtractionResult(text=text, matched_by=matched_by)

    def _locate_content(self, soup: BeautifulSoup) -> Tuple[str, str]:
        for matcher in self.matchers:
            text = matcher(soup)
            if text and text.strip():
                return text, getattr(matcher, 'label', getattr(matcher, '__name__', 'matcher'))

        # Fallback: whole document
        if soup.body is not None:
            logger.debug("No content selector matched, falling back to <body>")
            return soup.body.get_text(), 'body'

        logger.debug("No content selector matched and no <body>, using whole document")
        return soup.get_text(), 'document'
