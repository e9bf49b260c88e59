import pytest
import requests

from conftest import load_fixture, make_response
from core.exceptions import (
    ConfigurationError, FeedDecodeError, SourceConnectionError, SourceStatusError, SourceTimeoutError
)
from core.models.news import Feed, FeedType
from core.sources import FeedSource, get_all_sources, get_source, list_available_sources
from core.sources.api.theguardian import TheGuardianSource
from core.sources.base import DEFAULT_TIMEOUT, fetch_response
from core.sources.rss.bitfield import BitfieldSource
from core.sources.rss.cnn import CNNSource
from core.sources.rss.hackernews import HackerNewsSource
from core.sources.rss.techcrunch import TechCrunchSource


@pytest.mark.parametrize("source_class,url", [
    (CNNSource, "http://rss.cnn.com/rss/cnn_topstories.rss"),
    (HackerNewsSource, "https://news.ycombinator.com/rss"),
    (TechCrunchSource, "https://techcrunch.com/feed/"),
    (BitfieldSource, "https://bitfieldconsulting.com/golang?format=rss"),
])
def test_builtin_source_urls(source_class, url):
    source = source_class()

    assert source.url == url
    assert source.identifier == url


def test_builtin_source_timeouts():
    assert HackerNewsSource().timeout == DEFAULT_TIMEOUT
    assert BitfieldSource().timeout == 5
    assert BitfieldSource({"timeout": 12}).timeout == 12


def test_rss_source_fetches_and_parses(mock_session, rss_document):
    mock_session.get.return_value = make_response(content=rss_document)
    source = HackerNewsSource(session=mock_session)

    news = source.get_news()

    assert len(news) == 3
    mock_session.get.assert_called_once_with("https://news.ycombinator.com/rss", headers={}, timeout=DEFAULT_TIMEOUT)


def test_rss_source_host_override(mock_session, rss_document):
    mock_session.get.return_value = make_response(content=rss_document)
    source = CNNSource({"http_host": "http://127.0.0.1:8080/", "uri": "/cnn.rss"}, session=mock_session)

    source.get_news()

    assert mock_session.get.call_args[0][0] == "http://127.0.0.1:8080/cnn.rss"


def test_fetch_status_error_carries_status_text(mock_session):
    mock_session.get.return_value = make_response(status_code=404, reason="Not Found")

    with pytest.raises(SourceStatusError) as exc_info:
        HackerNewsSource(session=mock_session).get_news()

    assert exc_info.value.status == "404 Not Found"
    assert exc_info.value.context["source_name"] == "https://news.ycombinator.com/rss"


def test_fetch_timeout(mock_session):
    mock_session.get.side_effect = requests.Timeout("read timed out")

    with pytest.raises(SourceTimeoutError):
        BitfieldSource(session=mock_session).fetch()


def test_fetch_connection_error(mock_session):
    mock_session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(SourceConnectionError) as exc_info:
        fetch_response("broken", "http://127.0.0.1:1/", session=mock_session)

    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_decode_errors_propagate(mock_session):
    mock_session.get.return_value = make_response(content=b"{}")

    with pytest.raises(FeedDecodeError):
        TechCrunchSource(session=mock_session).get_news()


def test_feed_source_sends_client_headers(mock_session, atom_document):
    mock_session.get.return_value = make_response(content=atom_document)
    feed = Feed(endpoint="https://go.dev/blog/feed.atom", type=FeedType.ATOM)

    news = FeedSource(feed, session=mock_session).get_news()

    assert len(news) == 2
    _, kwargs = mock_session.get.call_args
    assert kwargs["headers"] == {"User-Agent": "MorningPost/0.1", "Accept": "*/*"}


def test_feed_source_user_agent_override(mock_session, rss_document):
    mock_session.get.return_value = make_response(content=rss_document)
    feed = Feed(endpoint="https://golangweekly.example/rss", type=FeedType.RSS)

    FeedSource(feed, {"user_agent": "Tester/1.0"}, session=mock_session).get_news()

    assert mock_session.get.call_args[1]["headers"]["User-Agent"] == "Tester/1.0"
    assert FeedSource.HEADERS["User-Agent"] == "MorningPost/0.1"


def test_feed_source_parses_with_stored_type(mock_session, rss_document):
    mock_session.get.return_value = make_response(content=rss_document)
    feed = Feed(endpoint="https://golangweekly.example/rss", type=FeedType.ATOM)

    with pytest.raises(FeedDecodeError):
        FeedSource(feed, session=mock_session).get_news()


def test_guardian_requires_api_key():
    with pytest.raises(ConfigurationError, match="GUARDIAN_API_KEY"):
        TheGuardianSource()


def test_guardian_reads_key_from_environment(monkeypatch, mock_session):
    monkeypatch.setenv("GUARDIAN_API_KEY", "secret")
    mock_session.get.return_value = make_response(content=load_fixture("guardian.json"))
    source = TheGuardianSource(session=mock_session)

    news = source.get_news()

    assert len(news) == 3
    assert source.url == "https://content.guardianapis.com/search?api-key=secret"
    assert "secret" not in source.identifier
    assert mock_session.get.call_args[1]["timeout"] == 5


def test_registry_lists_builtin_sources():
    assert set(list_available_sources()) >= {"cnn", "hackernews", "techcrunch", "bitfield", "theguardian"}
    assert isinstance(get_source("techcrunch"), TechCrunchSource)


def test_get_all_sources_skips_unconfigured_guardian():
    sources = get_all_sources({"timeout": 3})

    assert "theguardian" not in sources
    assert {"cnn", "hackernews", "techcrunch", "bitfield"} <= set(sources)
    assert sources["hackernews"].timeout == 3


def test_get_all_sources_subset_and_unknown_names():
    sources = get_all_sources(names=["hackernews", "nope"])

    assert list(sources) == ["hackernews"]


def test_get_source_unknown_name():
    with pytest.raises(KeyError):
        get_source("nope")
