#!/usr/bin/env python3
"""
Summary command endpoints: turn an article into a rendered summary page.
"""

import json
import asyncio
import logging
from argparse import Namespace
from pathlib import Path

from .base import BaseCommand, EXIT_OK
from core.artifacts import deliver_document
from core.content import MetadataExtractor
from core.models import GenerateResult
from core.text_sanitizer import normalize_article_text

logger = logging.getLogger(__name__)


class SummaryCommand(BaseCommand):
    """Generate article summaries from a URL or a local text file."""

    subcommands = ("generate", "analyze")

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute summary subcommand."""
        try:
            if subcommand == "generate":
                return self.generate(args)
            elif subcommand == "analyze":
                return self.analyze(args)
            else:
                return self.unknown_subcommand(subcommand)

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"summary {subcommand}")

    def generate(self, args: Namespace) -> int:
        """Fetch, extract, analyze and render an article URL."""
        pipeline = self.pipeline
        if getattr(args, 'with_metadata', False) and pipeline.metadata_extractor is None:
            pipeline.metadata_extractor = MetadataExtractor()

        if getattr(args, 'async_fetch', False):
            result = asyncio.run(pipeline.generate(args.url))
        else:
            result = pipeline.generate_sync(args.url)

        return self._deliver(result, args)

    def analyze(self, args: Namespace) -> int:
        """Analyze and render article text stored in a local file."""
        text = Path(args.file).read_text(encoding='utf-8')
        pipeline = self.pipeline
        text = pipeline.extractor.extract(text) if getattr(args, 'html', False) else normalize_article_text(text)
        result = pipeline.generate_from_text(text)
        return self._deliver(result, args)

    def _deliver(self, result: GenerateResult, args: Namespace) -> int:
        if getattr(args, 'json', False):
            self.report(json.dumps(result.summary.to_dict(), ensure_ascii=False, indent=2))

        delivery = deliver_document(
            result.document,
            open_in_browser=not getattr(args, 'no_open', False),
            download_dir=Path(args.output) if getattr(args, 'output', None) else None,
            release_delay=self.config.app.artifact_release_delay
        )

        summary = result.summary
        self.report(f"📰 {summary.title} ({summary.reading_time}, {summary.sentiment.value})")
        self.report(f"💡 {summary.summary}")
        self.report(f"✅ Summary {delivery.disposition.value}: {delivery.location}")
        return EXIT_OK
