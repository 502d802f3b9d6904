import asyncio

import aiohttp
import pytest
import requests

from core.content.fetcher import (
    AsyncContentFetcher, ContentFetcher, build_gateway_url, parse_gateway_envelope
)
from core.exceptions import FetchError

from conftest import gateway_body

ARTICLE_URL = "https://mp.weixin.qq.com/s/abc123?x=1&y=2"


def test_build_gateway_url_encodes_target():
    url = build_gateway_url(ARTICLE_URL, "https://proxy.test/get?url={url}")

    assert url == "https://proxy.test/get?url=https%3A%2F%2Fmp.weixin.qq.com%2Fs%2Fabc123%3Fx%3D1%26y%3D2"


def test_parse_gateway_envelope_returns_contents():
    assert parse_gateway_envelope(ARTICLE_URL, gateway_body("<html>ok</html>")) == "<html>ok</html>"


@pytest.mark.parametrize("body", [
    "<html>not json</html>",
    "[1, 2, 3]",
    gateway_body(None),
    gateway_body("   "),
    '{"status": {"http_code": 404}}',
])
def test_parse_gateway_envelope_rejects_unusable_bodies(body):
    with pytest.raises(FetchError):
        parse_gateway_envelope(ARTICLE_URL, body)


def test_fetch_returns_markup(fake_session_factory):
    session = fake_session_factory(200, gateway_body("<html><body>正文</body></html>"))
    fetcher = ContentFetcher(gateway_endpoint="https://proxy.test/get?url={url}", timeout=5, session=session)

    markup = fetcher.fetch(ARTICLE_URL)

    assert markup == "<html><body>正文</body></html>"
    assert len(session.calls) == 1
    assert session.calls[0]["url"].startswith("https://proxy.test/get?url=https%3A%2F%2F")
    assert session.calls[0]["timeout"] == 5
    assert "User-Agent" in session.headers


def test_fetch_server_error_raises_fetch_error(fake_session_factory):
    session = fake_session_factory(500, "Internal Server Error")
    fetcher = ContentFetcher(session=session)

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch(ARTICLE_URL)

    assert excinfo.value.status_code == 500
    assert excinfo.value.context["url"] == ARTICLE_URL
    # Single attempt, no retries
    assert len(session.calls) == 1


def test_fetch_transport_error_raises_fetch_error(fake_session_factory):
    session = fake_session_factory(error=requests.exceptions.ConnectionError("refused"))
    fetcher = ContentFetcher(session=session)

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch(ARTICLE_URL)

    assert "refused" in excinfo.value.context["original_error"]


def test_fetch_rejects_malformed_url_without_request(fake_session_factory):
    session = fake_session_factory(200, gateway_body("<html></html>"))
    fetcher = ContentFetcher(session=session)

    with pytest.raises(FetchError):
        fetcher.fetch("mp.weixin.qq.com/s/abc")

    assert session.calls == []


def test_async_fetch_returns_markup(fake_async_session_factory):
    session = fake_async_session_factory(200, gateway_body("<html>异步</html>"))
    fetcher = AsyncContentFetcher(gateway_endpoint="https://proxy.test/get?url={url}", session=session)

    markup = asyncio.run(fetcher.fetch(ARTICLE_URL))

    assert markup == "<html>异步</html>"
    assert session.requested[0].startswith("https://proxy.test/get?url=")
    # Externally owned session stays open
    assert session.closed is False


def test_async_fetch_error_status(fake_async_session_factory):
    fetcher = AsyncContentFetcher(session=fake_async_session_factory(502, "Bad Gateway"))

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(fetcher.fetch(ARTICLE_URL))

    assert excinfo.value.status_code == 502


@pytest.mark.parametrize("error", [
    aiohttp.ClientConnectionError("connection reset"),
    asyncio.TimeoutError(),
])
def test_async_fetch_transport_error(fake_async_session_factory, error):
    fetcher = AsyncContentFetcher(session=fake_async_session_factory(error=error))

    with pytest.raises(FetchError):
        asyncio.run(fetcher.fetch(ARTICLE_URL))


def test_async_fetcher_context_manager_closes_owned_session(monkeypatch, fake_async_session_factory):
    session = fake_async_session_factory(200, gateway_body("<html>ctx</html>"))
    fetcher = AsyncContentFetcher()
    monkeypatch.setattr(fetcher, "_create_session", lambda: session)

    async def run():
        async with fetcher as f:
            return await f.fetch(ARTICLE_URL)

    assert asyncio.run(run()) == "<html>ctx</html>"
    assert session.closed is True


def test_async_fetch_without_context_opens_one_shot_session(monkeypatch, fake_async_session_factory):
    session = fake_async_session_factory(200, gateway_body("<html>once</html>"))
    fetcher = AsyncContentFetcher()
    monkeypatch.setattr(fetcher, "_create_session", lambda: session)

    assert asyncio.run(fetcher.fetch(ARTICLE_URL)) == "<html>once</html>"
    assert session.closed is True


def test_concurrent_one_shot_fetches_use_separate_sessions(monkeypatch, fake_async_session_factory):
    opened = []

    def create_session():
        session = fake_async_session_factory(200, gateway_body("<html>both</html>"), delay=0.01)
        opened.append(session)
        return session

    fetcher = AsyncContentFetcher()
    monkeypatch.setattr(fetcher, "_create_session", create_session)

    async def run_both():
        return await asyncio.gather(fetcher.fetch(ARTICLE_URL), fetcher.fetch("https://mp.weixin.qq.com/s/other"))

    assert asyncio.run(run_both()) == ["<html>both</html>", "<html>both</html>"]
    assert len(opened) == 2
    assert all(session.closed for session in opened)
    assert fetcher._session is None
