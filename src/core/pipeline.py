#!/usr/bin/env python3
"""
Article summary pipeline orchestration.

URL -> markup -> text -> ArticleSummary -> rendered document, strictly in
that order. Each stage raises its own error kind; nothing is retried and
no partial result is returned.
"""

import logging
from datetime import datetime
from typing import Optional

from .analysis import StructuralAnalyzer
from .content import ContentFetcher, AsyncContentFetcher, ContentExtractor, MetadataExtractor
from .models import GenerateResult, ArticleMetadata
from .rendering import DocumentRenderer
from .security import SecurityValidator

logger = logging.getLogger(__name__)


class ArticlePipeline:
    """
    Runs one article through fetch, extract, analyze and render.

    Stages are injected so each can be swapped or faked independently.
    """

    def __init__(self,
                 validator: Optional[SecurityValidator] = None,
                 fetcher: Optional[ContentFetcher] = None,
                 async_fetcher: Optional[AsyncContentFetcher] = None,
                 extractor: Optional[ContentExtractor] = None,
                 analyzer: Optional[StructuralAnalyzer] = None,
                 renderer: Optional[DocumentRenderer] = None,
                 metadata_extractor: Optional[MetadataExtractor] = None):
        """
        Initialize pipeline.

        Args:
            validator: Accepted-URL check
            fetcher: Blocking fetch stage (used by ``generate_sync``)
            async_fetcher: Suspending fetch stage (used by ``generate``)
            extractor: Main-content extraction stage
            analyzer: Heuristic analysis stage
            renderer: Document rendering stage
            metadata_extractor: Optional title/author stage; off when None
        """
        self.validator = validator or SecurityValidator()
        self._fetcher = fetcher
        self._async_fetcher = async_fetcher
        self.extractor = extractor or ContentExtractor()
        self.analyzer = analyzer or StructuralAnalyzer()
        self.renderer = renderer or DocumentRenderer()
        self.metadata_extractor = metadata_extractor

    @property
    def fetcher(self) -> ContentFetcher:
        if self._fetcher is None:
            self._fetcher = ContentFetcher()
        return self._fetcher

    @property
    def async_fetcher(self) -> AsyncContentFetcher:
        if self._async_fetcher is None:
            self._async_fetcher = AsyncContentFetcher()
        return self._async_fetcher

    async def generate(self, url: str) -> GenerateResult:
        """
        Produce a summary and rendered document for an article URL.

        Only the fetch suspends; the remaining stages run synchronously.

        Raises:
            ValidationError: URL is not an accepted article link
            FetchError, ExtractionError, AnalysisError, RenderError: stage failures
        """
        url = self.validator.require_valid_url(url)
        logger.info(f"Generating summary for {url}")
        started = datetime.now()

        markup = await self.async_fetcher.fetch(url)
        return self._process_markup(url, markup, started)

    def generate_sync(self, url: str) -> GenerateResult:
        """Blocking variant of ``generate``."""
        url = self.validator.require_valid_url(url)
        logger.info(f"Generating summary for {url}")
        started = datetime.now()

        markup = self.fetcher.fetch(url)
        return self._process_markup(url, markup, started)

    def generate_from_text(self, text: str, metadata: Optional[ArticleMetadata] = None) -> GenerateResult:
        """Analyze and render already extracted article text."""
        summary = self.analyzer.analyze(text, metadata)
        document = self.renderer.render(summary)
        return GenerateResult(summary=summary, document=document)

    def _process_markup(self, url: str, markup: str, started: datetime) -> GenerateResult:
        extraction = self.extractor.extract_with_details(markup)

        metadata = None
        if self.metadata_extractor is not None:
            metadata = self.metadata_extractor.extract(markup)

        summary = self.analyzer.analyze(extraction.text, metadata)
        document = self.renderer.render(summary)

        elapsed = (datetime.now() - started).total_seconds()
        logger.info(f"Summary for {url} generated in {elapsed:.2f}s")

        return GenerateResult(
            summary=summary,
            document=document,
            source_url=url,
            details={
                'matched_by': extraction.matched_by,
                'text_length': len(extraction.text),
                'elapsed_seconds': elapsed
            }
        )
