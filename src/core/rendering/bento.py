#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bento-style HTML rendering of article summaries.

Every ArticleSummary maps to the same document shape: title card, reading
info card, summary card, numbered key points and tags. Only the escaped
values and the sentiment colour differ between documents.
"""

import logging
from datetime import datetime
from typing import Optional

from ..exceptions import RenderError
from ..models import ArticleSummary, Sentiment
from ..security import escape_markup

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION = "html"
DOCUMENT_FILENAME = f"article-summary.{DOCUMENT_EXTENSION}"
DOCUMENT_MIME_TYPE = "text/html"

BRAND = "格致 BenSight"

SENTIMENT_COLORS = {
    Sentiment.POSITIVE: "#10b981",  # green
    Sentiment.NEGATIVE: "#ef4444",  # red
    Sentiment.NEUTRAL: "#6b7280",   # gray
}

STYLESHEET = """
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            min-height: 100vh;
            padding: 2rem 1rem;
            font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'PingFang SC', 'Microsoft YaHei', sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: #1f2937;
        }
        .container { max-width: 80rem; margin: 0 auto; }
        .header { text-align: center; margin-bottom: 2rem; }
        .brand { font-size: 3rem; font-weight: 700; color: #ffffff; margin-bottom: 1rem; }
        .tagline { color: rgba(255, 255, 255, 0.8); font-size: 1.125rem; }
        .grid {
            display: grid;
            grid-template-columns: repeat(6, minmax(0, 1fr));
            grid-auto-rows: minmax(200px, auto);
            gap: 1.5rem;
        }
        .bento-card {
            background: rgba(255, 255, 255, 0.95);
            border: 1px solid rgba(255, 255, 255, 0.2);
            border-radius: 1rem;
            padding: 1.5rem;
            transition: all 0.3s ease;
        }
        .bento-card:hover { transform: translateY(-4px); box-shadow: 0 20px 40px rgba(0, 0, 0, 0.1); }
        .card-title { grid-column: span 4; }
        .card-reading { grid-column: span 2; text-align: center; }
        .card-summary, .card-points { grid-column: span 3; grid-row: span 2; }
        .card-tags { grid-column: span 6; }
        .article-title { font-size: 1.875rem; font-weight: 700; color: #1f2937; margin-bottom: 0.5rem; }
        .byline, .caption { color: #4b5563; font-size: 0.875rem; }
        .reading-time { font-size: 1.875rem; font-weight: 700; margin-bottom: 0.5rem; }
        .sentiment { margin-top: 1rem; }
        .sentiment-dot { width: 1rem; height: 1rem; border-radius: 9999px; margin: 0 auto; }
        .sentiment-label { font-size: 0.75rem; color: #6b7280; margin-top: 0.25rem; text-transform: capitalize; }
        h3 { font-size: 1.25rem; font-weight: 600; margin-bottom: 1rem; }
        .summary-text { color: #374151; line-height: 1.75; }
        .points { list-style: none; }
        .points li { display: flex; align-items: flex-start; margin-bottom: 0.75rem; }
        .point-index {
            flex-shrink: 0; width: 1.5rem; height: 1.5rem; margin-right: 0.75rem;
            border-radius: 9999px; background: linear-gradient(90deg, #3b82f6, #a855f7);
            color: #ffffff; font-size: 0.75rem; font-weight: 700;
            display: flex; align-items: center; justify-content: center;
        }
        .point-text { color: #374151; font-size: 0.875rem; line-height: 1.6; }
        .tags { display: flex; flex-wrap: wrap; gap: 0.5rem; }
        .tag {
            padding: 0.25rem 0.75rem; border-radius: 9999px; font-size: 0.875rem; font-weight: 500;
            color: #1e40af; background: linear-gradient(90deg, #dbeafe, #f3e8ff); border: 1px solid #bfdbfe;
        }
        .footer { text-align: center; margin-top: 3rem; color: rgba(255, 255, 255, 0.6); font-size: 0.875rem; }
        .footer span { color: rgba(255, 255, 255, 0.8); }
        @media (max-width: 768px) {
            .grid { grid-template-columns: 1fr; }
            .card-title, .card-reading, .card-summary, .card-points, .card-tags { grid-column: span 1; grid-row: auto; }
            .brand { font-size: 2.25rem; }
        }"""


def _render_key_points(summary: ArticleSummary) -> str:
    items = []
    for index, point in enumerate(summary.key_points, 1):
        items.append(
            f"""
                    <li>
                        <span class="point-index">{index}</span>
                        <span class="point-text">{escape_markup(point)}</span>
                    </li>"""
        )
    return ''.join(items)


def _render_tags(summary: ArticleSummary) -> str:
    return ''.join(
        f"""
                    <span class="tag">{escape_markup(tag)}</span>"""
        for tag in summary.tags
    )


def render_document(summary: ArticleSummary, generated_at: Optional[datetime] = None) -> str:
    """
    Render an ArticleSummary into a standalone HTML document.

    Args:
        summary: Analyzed article summary
        generated_at: Timestamp shown in the footer (defaults to now)

    Returns:
        Complete HTML document
    """
    generated_at = generated_at or datetime.now()
    sentiment = Sentiment(summary.sentiment)
    title = escape_markup(summary.title)

    document = f"""<!DOCTYPE html>
<html lang="zh-CN">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} - 格致摘要</title>
    <style>{STYLESHEET}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1 class="brand">{BRAND}</h1>
            <p class="tagline">Intelligent Article Summary</p>
        </div>

        <div class="grid">
            <div class="bento-card card-title">
                <h2 class="article-title">{title}</h2>
                <p class="byline">By {escape_markup(summary.author)} • {escape_markup(summary.publish_date)}</p>
            </div>

            <div class="bento-card card-reading">
                <div class="reading-time">{escape_markup(summary.reading_time)}</div>
                <p class="caption">Reading Time</p>
                <div class="sentiment">
                    <div class="sentiment-dot" style="background-color: {SENTIMENT_COLORS[sentiment]}"></div>
                    <p class="sentiment-label">{escape_markup(sentiment.value)}</p>
                </div>
            </div>

            <div class="bento-card card-summary">
                <h3>摘要</h3>
                <p class="summary-text">{escape_markup(summary.summary)}</p>
            </div>

            <div class="bento-card card-points">
                <h3>核心要点</h3>
                <ul class="points">{_render_key_points(summary)}
                </ul>
            </div>

            <div class="bento-card card-tags">
                <h3>标签</h3>
                <div class="tags">{_render_tags(summary)}
                </div>
            </div>
        </div>

        <div class="footer">
            <p>Generated by {BRAND} • <span>{escape_markup(generated_at.strftime('%Y/%m/%d %H:%M:%S'))}</span></p>
        </div>
    </div>
</body>
</html>
"""
    logger.debug(f"Rendered document ({len(document)} chars, sentiment={sentiment.value})")
    return document


class DocumentRenderer:
    """Renders summaries; holds a fixed clock when one is injected."""

    extension = DOCUMENT_EXTENSION
    filename = DOCUMENT_FILENAME

    def __init__(self, clock=None):
        self._clock = clock

    def render(self, summary: ArticleSummary, generated_at: Optional[datetime] = None) -> str:
        if not isinstance(summary, ArticleSummary):
            raise RenderError(f"expected ArticleSummary, got {type(summary).__name__}")
        if generated_at is None and self._clock is not None:
            generated_at = self._clock()
        return render_document(summary, generated_at)
