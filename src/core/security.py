#!/usr/bin/env python3
"""
Security utilities for article summarization.

Provides input URL validation against the accepted publishing platform and
markup escaping for values interpolated into rendered documents.
"""

import html
import urllib.parse
from typing import Iterable, Optional
import logging

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into HTML text or attributes."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def is_syntactic_url(url: str) -> bool:
    """Check that a string parses as an absolute http(s) URL with a host."""
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urllib.parse.urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme.lower() in SecurityValidator.ALLOWED_SCHEMES and bool(parsed.netloc)


class SecurityValidator:
    """Validates article URLs before they enter the pipeline."""

    MAX_URL_LENGTH = 2048

    # Allowed URL schemes
    ALLOWED_SCHEMES = {'http', 'https'}

    # Hosts publishing articles this pipeline knows how to extract
    TRUSTED_DOMAINS = {
        'mp.weixin.qq.com',
    }

    def __init__(self, trusted_domains: Optional[Iterable[str]] = None, max_url_length: Optional[int] = None):
        if trusted_domains is not None:
            self.TRUSTED_DOMAINS = {domain.strip().lower() for domain in trusted_domains if domain.strip()}
        if max_url_length is not None:
            self.MAX_URL_LENGTH = max_url_length

    def validate_url(self, url: str) -> bool:
        """
        Validate that a URL is well formed and from a trusted platform.

        Returns:
            True if URL is valid, False otherwise
        """
        try:
            self.require_valid_url(url)
            return True
        except ValidationError as e:
            logger.warning(e.message)
            return False

    def require_valid_url(self, url: str) -> str:
        """
        Validate a URL, raising on failure.

        Args:
            url: Candidate article URL

        Returns:
            The stripped URL

        Raises:
            ValidationError: If the URL is malformed or from an untrusted host
        """
        if not url or not isinstance(url, str):
            raise ValidationError(str(url), "URL is empty")

        url = url.strip()
        if len(url) > self.MAX_URL_LENGTH:
            raise ValidationError(url[:80], f"URL longer than {self.MAX_URL_LENGTH} characters")

        try:
            parsed = urllib.parse.urlparse(url)
        except ValueError as e:
            raise ValidationError(url, f"unparseable URL ({e})")

        if parsed.scheme.lower() not in self.ALLOWED_SCHEMES:
            raise ValidationError(url, f"scheme {parsed.scheme!r} not allowed")

        domain = (parsed.hostname or "").lower()
        if domain not in self.TRUSTED_DOMAINS:
            raise ValidationError(url, f"untrusted domain {domain!r}")

        return url
