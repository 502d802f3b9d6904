#!/usr/bin/env python3
"""
Text sanitization utilities for extracted article content.

Article pages (WeChat especially) are full of indentation, non-breaking
spaces and empty paragraphs; these helpers reduce that to plain text.
"""

import re
import logging

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r'\s+')
_BLANK_LINES = re.compile(r'\n\s*\n')


def collapse_whitespace(text: str) -> str:
    """
    Collapse every run of whitespace to a single space.

    Args:
        text: Input text

    Returns:
        Text where spaces, tabs, newlines and NBSPs are single spaces
    """
    if not text:
        return text

    return _WHITESPACE_RUN.sub(' ', text)


def remove_blank_lines(text: str) -> str:
    """Remove empty lines between paragraphs."""
    if not text:
        return text

    return _BLANK_LINES.sub('\n', text)


def normalize_article_text(text: str) -> str:
    """
    Normalize raw element text into single-line article text.

    Args:
        text: Raw text content of a document element

    Returns:
        Whitespace-collapsed, trimmed text
    """
    if not text:
        return ""

    normalized = remove_blank_lines(collapse_whitespace(text)).strip()

    if len(normalized) != len(text):
        logger.debug(
            "Normalized article text: %d -> %d chars",
            len(text),
            len(normalized),
        )

    return normalized
