"""
Content fetcher for retrieving raw article markup.

Article pages are not fetched directly: every request goes through an
external fetch gateway (an allorigins-style proxy) that answers with a
JSON envelope whose ``contents`` member holds the page markup.
One attempt per call, no retries.
"""

import json
import asyncio
import logging
from typing import Optional, Any
from urllib.parse import quote

import aiohttp
import requests

from ..config import DEFAULT_GATEWAY_URL, DEFAULT_USER_AGENT
from ..exceptions import FetchError
from ..security import is_syntactic_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20


def build_gateway_url(url: str, endpoint: str = DEFAULT_GATEWAY_URL) -> str:
    """Percent-encode ``url`` into the gateway endpoint template."""
    return endpoint.replace('{url}', quote(url, safe=''))


def parse_gateway_envelope(url: str, body: str) -> str:
    """
    Pull the article markup out of a gateway response body.

    Args:
        url: Article URL the body belongs to (for error context)
        body: Raw response body

    Returns:
        Article markup

    Raises:
        FetchError: If the body is not a JSON envelope with non-empty contents
    """
    try:
        envelope = json.loads(body)
    except (TypeError, ValueError) as e:
        raise FetchError(url, "gateway response is not JSON", original_error=e)

    if not isinstance(envelope, dict):
        raise FetchError(url, "gateway response is not a JSON object")

    contents = envelope.get('contents')
    if not isinstance(contents, str) or not contents.strip():
        status = envelope.get('status') or {}
        http_code = status.get('http_code') if isinstance(status, dict) else None
        raise FetchError(url, "gateway returned no markup", status_code=http_code)

    return contents


def _require_url(url: str) -> None:
    if not is_syntactic_url(url):
        raise FetchError(str(url), "not a valid http(s) URL")


class ContentFetcher:
    """Blocking fetcher that retrieves article markup through the gateway."""

    def __init__(self,
                 gateway_endpoint: str = DEFAULT_GATEWAY_URL,
                 timeout: int = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[requests.Session] = None):
        """
        Initialize content fetcher.

        Args:
            gateway_endpoint: Gateway URL template containing ``{url}``
            timeout: Request timeout in seconds
            user_agent: User-Agent string for requests
            session: Pre-configured session (a new one is created if None)
        """
        self.gateway_endpoint = gateway_endpoint
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json,text/plain;q=0.9,*/*;q=0.8",
            "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
        })

    def fetch(self, url: str) -> str:
        """
        Fetch article markup for ``url``.

        Args:
            url: Article URL

        Returns:
            Raw article markup

        Raises:
            FetchError: On transport failure, non-success status or bad envelope
        """
        _require_url(url)
        gateway_url = build_gateway_url(url, self.gateway_endpoint)
        logger.debug(f"Fetching {url} via gateway")

        try:
            response = self.session.get(gateway_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Gateway request failed for {url}: {e}")
            raise FetchError(url, "gateway unreachable", original_error=e)

        if not 200 <= response.status_code < 300:
            logger.warning(f"Gateway answered HTTP {response.status_code} for {url}")
            raise FetchError(url, "gateway returned an error status", status_code=response.status_code)

        markup = parse_gateway_envelope(url, response.text)
        logger.info(f"Fetched {url} ({len(markup)} chars of markup)")
        return markup

    def close(self) -> None:
        self.session.close()


class AsyncContentFetcher:
    """Async fetcher; the only pipeline stage that suspends."""

    def __init__(self,
                 gateway_endpoint: str = DEFAULT_GATEWAY_URL,
                 timeout: int = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[Any] = None):
        """
        Initialize async content fetcher.

        Args:
            gateway_endpoint: Gateway URL template containing ``{url}``
            timeout: Request timeout in seconds
            user_agent: User-Agent string for requests
            session: Externally owned ``aiohttp.ClientSession``
        """
        self.gateway_endpoint = gateway_endpoint
        self.timeout = timeout
        self.user_agent = user_agent

        self._session = session
        self._owns_session = False

    def _create_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={
                'User-Agent': self.user_agent,
                'Accept': 'application/json,text/plain;q=0.9,*/*;q=0.8',
            }
        )

    async def __aenter__(self):
        """Async context manager entry."""
        if self._session is None:
            self._session = self._create_session()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def fetch(self, url: str) -> str:
        """
        Fetch article markup for ``url``.

        Usable inside ``async with`` (shared session) or bare, in which case
        a one-shot session is opened and closed around the request.

        Raises:
            FetchError: On transport failure, non-success status or bad envelope
        """
        _require_url(url)

        if self._session is not None:
            return await self._fetch(url, self._session)

        # One session per call, never stored on self
        async with self._create_session() as session:
            return await self._fetch(url, session)

    async def _fetch(self, url: str, session: aiohttp.ClientSession) -> str:
        gateway_url = build_gateway_url(url, self.gateway_endpoint)
        logger.debug(f"Fetching {url} via gateway (async)")

        try:
            async with session.get(gateway_url) as response:
                if not 200 <= response.status < 300:
                    logger.warning(f"Gateway answered HTTP {response.status} for {url}")
                    raise FetchError(url, "gateway returned an error status", status_code=response.status)
                body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Gateway request failed for {url}: {e}")
            raise FetchError(url, "gateway unreachable", original_error=e)

        markup = parse_gateway_envelope(url, body)
        logger.info(f"Fetched {url} ({len(markup)} chars of markup)")
        return markup
