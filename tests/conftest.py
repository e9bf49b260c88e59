import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

FIXTURES_PATH = Path(__file__).resolve().parent / "fixtures"

from core.exceptions import SourceConnectionError  # noqa: E402
from core.models.news import NewsItem  # noqa: E402
from core.sources.base import NewsSource  # noqa: E402


def load_fixture(name: str) -> bytes:
    return (FIXTURES_PATH / name).read_bytes()


def make_news(count: int, feed: str = "fake") -> List[NewsItem]:
    return [
        NewsItem(title=f"{feed} story {i}", url=f"https://{feed}.example/{i}", feed=feed)
        for i in range(count)
    ]


class FakeSource(NewsSource):
    """Source returning canned news, or raising a canned error."""

    def __init__(self, name: str, news: Optional[List[NewsItem]] = None, error: Optional[Exception] = None) -> None:
        super().__init__()
        self.name = name
        self.news = news or []
        self.error = error
        self.calls = 0

    @property
    def identifier(self) -> str:
        return self.name

    def get_news(self) -> List[NewsItem]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.news)


def make_response(status_code: int = 200, content: bytes = b"", reason: str = "OK",
                  headers: Optional[Dict[str, str]] = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.content = content
    response.headers = headers or {}
    return response


class FixtureHandler(BaseHTTPRequestHandler):
    """Serves ``routes`` registered on the server: path -> (status, content type, body)."""

    def do_GET(self) -> None:
        self.server.requests.append({"path": self.path, "headers": dict(self.headers)})
        route: Optional[Tuple[int, str, bytes]] = self.server.routes.get(self.path)
        if route is None:
            self.send_error(404, "Not Found")
            return
        status, content_type, body = route
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args) -> None:
        pass


@pytest.fixture
def fixture_server():
    """A real local HTTP server; tests register routes on ``server.routes``."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), FixtureHandler)
    server.routes = {}
    server.requests = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    server.base_url = f"http://127.0.0.1:{server.server_address[1]}"
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def closed_port_url() -> str:
    """URL of a local port nothing listens on."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), FixtureHandler)
    port = server.server_address[1]
    server.server_close()
    return f"http://127.0.0.1:{port}"


@pytest.fixture
def rss_document() -> bytes:
    return load_fixture("rss.xml")


@pytest.fixture
def atom_document() -> bytes:
    return load_fixture("atom.xml")


@pytest.fixture
def rdf_document() -> bytes:
    return load_fixture("rdf.xml")


@pytest.fixture
def fake_source_factory():
    def _factory(name: str, count: int = 0, error: Optional[Exception] = None) -> FakeSource:
        return FakeSource(name, make_news(count, name), error)

    return _factory


@pytest.fixture
def failing_source() -> FakeSource:
    return FakeSource(
        "http://127.0.0.1:1/broken",
        error=SourceConnectionError("broken", "http://127.0.0.1:1/broken", ConnectionRefusedError("refused")),
    )


@pytest.fixture
def mock_session():
    return MagicMock()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's store, API keys and global singletons."""
    from core.config import reset_config
    from core.container import reset_container

    monkeypatch.setenv("MORNINGPOST_STORE", str(tmp_path / "store" / "morningpost.json"))
    monkeypatch.delenv("GUARDIAN_API_KEY", raising=False)
    for key in ("HTTP_TIMEOUT", "LISTEN_PORT", "SHOW_MAX_NEWS", "FEED_USER_AGENT", "LOG_LEVEL", "VERBOSE_LOGGING"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()
