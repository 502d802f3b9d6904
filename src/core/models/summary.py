#!/usr/bin/env python3
"""
Article summary data models.

ArticleSummary is the record handed from the analyzer to the renderer.
It is frozen: once analysis produced it, nothing downstream changes it.
"""

from enum import Enum
from typing import Dict, Any, Tuple, Optional
from dataclasses import dataclass, field

from ..exceptions import AnalysisError


class Sentiment(str, Enum):
    """Overall tone of an article."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class ArticleMetadata:
    """Title and byline read from article markup, when available."""
    title: Optional[str] = None
    author: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.title or self.author)


@dataclass(frozen=True)
class ArticleSummary:
    """Structured summary of a single article."""
    title: str
    author: str
    summary: str
    key_points: Tuple[str, ...]
    tags: Tuple[str, ...]
    publish_date: str  # ISO calendar date, e.g. "2024-05-01"
    reading_time: str  # "<n> min read"
    sentiment: Sentiment = Sentiment.NEUTRAL

    def __post_init__(self):
        """Coerce sequences to tuples and validate."""
        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, 'key_points', tuple(self.key_points))
        object.__setattr__(self, 'tags', tuple(self.tags))
        try:
            object.__setattr__(self, 'sentiment', Sentiment(self.sentiment))
        except ValueError:
            raise AnalysisError(f"unknown sentiment {self.sentiment!r}") from None

        if not self.title or not self.title.strip():
            raise AnalysisError("summary title must not be empty")
        if not 1 <= len(self.key_points) <= 5:
            raise AnalysisError(f"summary needs 1-5 key points, got {len(self.key_points)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the external field names."""
        return {
            'title': self.title,
            'author': self.author,
            'summary': self.summary,
            'keyPoints': list(self.key_points),
            'tags': list(self.tags),
            'publishDate': self.publish_date,
            'readingTime': self.reading_time,
            'sentiment': self.sentiment.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ArticleSummary':
        """Create ArticleSummary from dictionary."""
        return cls(
            title=data.get('title', ''),
            author=data.get('author', ''),
            summary=data.get('summary', ''),
            key_points=data.get('keyPoints', data.get('key_points', ())),
            tags=data.get('tags', ()),
            publish_date=data.get('publishDate', data.get('publish_date', '')),
            reading_time=data.get('readingTime', data.get('reading_time', '')),
            sentiment=data.get('sentiment', Sentiment.NEUTRAL.value)
        )


@dataclass(frozen=True)
class GenerateResult:
    """Output of one pipeline invocation."""
    summary: ArticleSummary
    document: str
    source_url: str = ""
    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary.to_dict(),
            'document': self.document,
            'source_url': self.source_url
        }
