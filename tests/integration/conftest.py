import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiohttp
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from core.config import Config, GatewayConfig, ApplicationConfig, reset_config  # noqa: E402
from core.container import Container, reset_container  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 9, 30, 0)

ARTICLE_TEXT = (
    "关键发现：今年第一季度公司销售增长显著，新产品线带来了超过三成的收入。"
    "团队通过持续优化供应链，成功降低了运营成本。"
    "不过，原材料价格上涨仍然是一个风险。"
    "建议管理层在下半年继续加大创新投入，并关注海外市场的变化。"
    "总结来看，公司整体经营状况良好，未来发展前景值得期待。"
)


def wechat_page(body_text: str = ARTICLE_TEXT, title: str = "季度经营分析", author: str = "格致研究") -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta property="og:title" content="{title}">
    <meta name="author" content="{author}">
    <title>{title}</title>
    <script>var ct = "1714521600";</script>
    <style>.rich_media_content {{ visibility: hidden; }}</style>
</head>
<body>
    <div class="rich_media_area_primary">
        <h1 id="activity-name">  {title}  </h1>
        <a id="js_name">{author}</a>
        <div class="rich_media_content" id="js_content">
            <p>{body_text}</p>
            <p>   </p>
        </div>
    </div>
    <div class="footer-content">相关推荐</div>
</body>
</html>"""


def gateway_body(markup: Optional[str], http_code: int = 200) -> str:
    return json.dumps({"contents": markup, "status": {"http_code": http_code}})


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.headers: Dict[str, str] = {}
        self.response = response or FakeResponse()
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


class FakeAsyncResponse:
    def __init__(self, status: int, body: str, error: Optional[Exception] = None, delay: float = 0,
                 session: Optional["FakeAsyncSession"] = None) -> None:
        self.status = status
        self._body = body
        self._error = error
        self._delay = delay
        self._session = session

    async def __aenter__(self):
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error:
            raise self._error
        if self._session is not None and self._session.closed:
            # aiohttp refuses to use a closed session
            raise aiohttp.ClientConnectionError("Connector is closed.")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def text(self) -> str:
        return self._body


class FakeAsyncSession:
    """Stands in for aiohttp.ClientSession."""

    def __init__(self, status: int = 200, body: str = "", error: Optional[Exception] = None,
                 delay: float = 0) -> None:
        self.status = status
        self.body = body
        self.error = error
        self.delay = delay
        self.requested: List[str] = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False

    def get(self, url: str) -> FakeAsyncResponse:
        self.requested.append(url)
        return FakeAsyncResponse(self.status, self.body, self.error, self.delay, session=self)

    async def close(self) -> None:
        self.closed = True


class FakeOpener:
    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.opened: List[str] = []

    def __call__(self, uri: str) -> bool:
        self.opened.append(uri)
        return self.accept


@pytest.fixture(autouse=True)
def _isolated_globals():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def article_text() -> str:
    return ARTICLE_TEXT


@pytest.fixture
def article_markup() -> str:
    return wechat_page()


@pytest.fixture
def fake_session_factory():
    def _factory(status_code: int = 200, text: str = "", error: Optional[Exception] = None) -> FakeSession:
        return FakeSession(FakeResponse(status_code, text), error)

    return _factory


@pytest.fixture
def fake_async_session_factory():
    def _factory(status: int = 200, body: str = "", error: Optional[Exception] = None,
                 delay: float = 0) -> FakeAsyncSession:
        return FakeAsyncSession(status, body, error, delay)

    return _factory


@pytest.fixture
def fake_opener_factory():
    def _factory(accept: bool = True) -> FakeOpener:
        return FakeOpener(accept)

    return _factory


@pytest.fixture
def test_config() -> Config:
    return Config(
        gateway=GatewayConfig(),
        app=ApplicationConfig(artifact_release_delay=0.0),
        environment="test",
    )


@pytest.fixture
def container_factory(test_config):
    def _factory(pipeline_factory) -> Container:
        container = Container()
        container.register_instance('config', test_config)
        container.register_factory('pipeline', pipeline_factory)
        return container

    return _factory
