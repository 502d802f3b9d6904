"""
Content fetching and extraction module.
"""

from .fetcher import ContentFetcher, AsyncContentFetcher
from .extractor import ContentExtractor, ExtractionResult, CONTENT_SELECTORS, selector_matcher
from .metadata import MetadataExtractor

__all__ = [
    'ContentFetcher', 'AsyncContentFetcher',
    'ContentExtractor', 'ExtractionResult', 'CONTENT_SELECTORS', 'selector_matcher',
    'MetadataExtractor'
]
