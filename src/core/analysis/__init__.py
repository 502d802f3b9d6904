#!/usr/bin/env python3
"""
Heuristic analysis of article text.

The analyzer only depends on the keyword tables, so it can be replaced by
a model-backed implementation with the same ``analyze(text)`` contract.
"""

from .analyzer import StructuralAnalyzer, estimate_reading_time, split_sentences, classify_sentiment
from .keywords import KeywordTables, DEFAULT_TABLES

__all__ = [
    'StructuralAnalyzer', 'estimate_reading_time', 'split_sentences', 'classify_sentiment',
    'KeywordTables', 'DEFAULT_TABLES'
]
