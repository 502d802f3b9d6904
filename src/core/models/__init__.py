#!/usr/bin/env python3
"""
Core data models for article summarization.

Contains all data structures passed between pipeline stages.
"""

from .summary import ArticleSummary, ArticleMetadata, GenerateResult, Sentiment

__all__ = ['ArticleSummary', 'ArticleMetadata', 'GenerateResult', 'Sentiment']
