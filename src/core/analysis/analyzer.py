#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Heuristic structural analyzer.

Derives an ArticleSummary from plain article text without any model:
1. Reading time from word count
2. Sentence segmentation on terminal punctuation
3. Summary = first sentence
4. Key points = sentences containing importance markers
5. Sentiment = positive vs negative keyword counts
Title, author and tags are placeholders / fixed labels.
"""

import math
import logging
from datetime import datetime
from typing import Callable, List, Optional

import pytz

from ..exceptions import AnalysisError
from ..models import ArticleSummary, ArticleMetadata, Sentiment
from . import keywords
from .keywords import KeywordTables, DEFAULT_TABLES

logger = logging.getLogger(__name__)


def count_words(text: str) -> int:
    """Whitespace-delimited token count."""
    return len(text.split())


def estimate_reading_time(text: str, words_per_minute: int = keywords.WORDS_PER_MINUTE) -> str:
    """Reading time as ``"<n> min read"``, rounded up, at least one minute."""
    minutes = max(1, math.ceil(count_words(text) / words_per_minute))
    return f"{minutes} min read"


def split_sentences(text: str) -> List[str]:
    """Split on sentence terminals, dropping blank segments."""
    return [segment for segment in keywords.SENTENCE_TERMINALS.split(text) if segment.strip()]


def classify_sentiment(positive_count: int, negative_count: int) -> Sentiment:
    if positive_count > negative_count:
        return Sentiment.POSITIVE
    if negative_count > positive_count:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


class StructuralAnalyzer:
    """
    Builds an ArticleSummary from normalized article text.

    Deterministic for a given text and clock.
    """

    def __init__(self,
                 tables: KeywordTables = DEFAULT_TABLES,
                 timezone: str = "Asia/Shanghai",
                 clock: Optional[Callable[[], datetime]] = None) -> None:
        """
        Args:
            tables: Keyword tables for key points and sentiment
            timezone: Zone the publish date is computed in
            clock: Returns "now"; defaults to the current time in ``timezone``
        """
        self.tables = tables
        self.tz = pytz.timezone(timezone)
        self._clock = clock or (lambda: datetime.now(self.tz))

    def analyze(self, text: str, metadata: Optional[ArticleMetadata] = None) -> ArticleSummary:
        """
        Analyze article text.

        Args:
            text: Normalized article text
            metadata: Optional title/author read from markup; replaces placeholders

        Returns:
            ArticleSummary for the text

        Raises:
            AnalysisError: If text is not a non-blank string
        """
        if not isinstance(text, str):
            raise AnalysisError(f"expected str, got {type(text).__name__}")
        if not text.strip():
            raise AnalysisError("text is empty")

        sentences = split_sentences(text)
        summary = sentences[0].strip() if sentences else keywords.PLACEHOLDER_SUMMARY

        key_points = self.extract_key_points(sentences)
        sentiment = self.score_sentiment(text)

        title = keywords.PLACEHOLDER_TITLE
        author = keywords.PLACEHOLDER_AUTHOR
        if metadata is not None:
            title = metadata.title or title
            author = metadata.author or author

        result = ArticleSummary(
            title=title,
            author=author,
            summary=summary,
            key_points=key_points,
            tags=self.tables.tags,
            publish_date=self._clock().date().isoformat(),
            reading_time=estimate_reading_time(text),
            sentiment=sentiment
        )

        logger.info(
            f"Analyzed {len(text)} chars: {len(sentences)} sentences, "
            f"{len(result.key_points)} key points, sentiment={sentiment.value}"
        )
        return result

    def extract_key_points(self, sentences: List[str]) -> List[str]:
        """Up to five marker-bearing sentences longer than ten characters."""
        candidates = [s for s in sentences if self.tables.is_key_point(s)][:keywords.MAX_KEY_POINTS]
        points = [s.strip() for s in candidates]
        points = [p for p in points if len(p) > keywords.KEY_POINT_MIN_LENGTH]
        return points or [keywords.PLACEHOLDER_KEY_POINT]

    def score_sentiment(self, text: str) -> Sentiment:
        positive = self.tables.count_positive(text)
        negative = self.tables.count_negative(text)
        logger.debug(f"Sentiment counts: positive={positive}, negative={negative}")
        return classify_sentiment(positive, negative)
