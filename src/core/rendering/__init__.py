"""
Rendering of article summaries into standalone documents.
"""

from .bento import (
    DocumentRenderer, render_document, SENTIMENT_COLORS,
    DOCUMENT_EXTENSION, DOCUMENT_FILENAME, DOCUMENT_MIME_TYPE
)

__all__ = [
    'DocumentRenderer', 'render_document', 'SENTIMENT_COLORS',
    'DOCUMENT_EXTENSION', 'DOCUMENT_FILENAME', 'DOCUMENT_MIME_TYPE'
]
