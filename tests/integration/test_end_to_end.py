import pytest

from conftest import load_fixture
from cli_router import CLIRouter
from core.aggregator import Aggregator
from core.exceptions import AggregationError, SourceConnectionError, SourceStatusError
from core.feeds.finder import FeedFinder
from core.models.news import Feed, FeedType
from core.sources import FeedSource
from core.sources.rss.hackernews import HackerNewsSource

PAGE = b"""<!DOCTYPE html>
<html><head>
  <link rel="alternate" type="application/rss+xml" href="/rss.xml">
  <link rel="alternate" type="application/atom+xml" href="atom.xml">
</head><body><p>Blog</p></body></html>"""


@pytest.fixture
def feed_server(fixture_server):
    fixture_server.routes.update({
        "/": (200, "text/html; charset=utf-8", PAGE),
        "/rss.xml": (200, "application/rss+xml", load_fixture("rss.xml")),
        "/atom.xml": (200, "application/atom+xml", load_fixture("atom.xml")),
        "/rdf.xml": (200, "text/xml", load_fixture("rdf.xml")),
    })
    return fixture_server


def test_aggregates_registered_feeds_over_http(feed_server):
    feeds = [
        Feed(endpoint=f"{feed_server.base_url}/rss.xml", type=FeedType.RSS),
        Feed(endpoint=f"{feed_server.base_url}/atom.xml", type=FeedType.ATOM),
        Feed(endpoint=f"{feed_server.base_url}/rdf.xml", type=FeedType.RDF),
    ]
    aggregator = Aggregator.from_sources(FeedSource(feed) for feed in feeds)

    aggregator.get_news()

    assert len(aggregator.pool) == 3 + 2 + 2
    assert {item.feed for item in aggregator.pool.items()} == {"Go Weekly", "The Go Blog", "Slashdot"}
    assert {request["headers"].get("User-Agent") for request in feed_server.requests} == {"MorningPost/0.1"}


def test_connection_refused_fails_the_cycle_but_keeps_other_news(feed_server, closed_port_url):
    good = FeedSource(Feed(endpoint=f"{feed_server.base_url}/rss.xml", type=FeedType.RSS))
    refused = FeedSource(Feed(endpoint=f"{closed_port_url}/rss.xml", type=FeedType.RSS))
    sources = [good, refused]
    aggregator = Aggregator(lambda: sources)

    with pytest.raises(AggregationError) as exc_info:
        aggregator.get_news()

    assert exc_info.value.source_id == refused.identifier
    assert isinstance(exc_info.value.original_error, SourceConnectionError)
    assert len(aggregator.pool) == 3

    sources.remove(refused)
    aggregator.get_news()
    assert len(aggregator.pool) == 3


def test_missing_feed_reports_status(feed_server):
    source = FeedSource(Feed(endpoint=f"{feed_server.base_url}/gone.xml", type=FeedType.RSS))

    with pytest.raises(SourceStatusError) as exc_info:
        source.get_news()

    assert exc_info.value.status == "404 Not Found"


def test_builtin_source_against_local_host(feed_server):
    source = HackerNewsSource({"http_host": feed_server.base_url, "uri": "rss.xml"})

    assert [item.title for item in source.get_news()] == [
        "Go 1.22 released", "Generics in practice", "Profiling with pprof"
    ]


def test_finder_discovers_feeds_from_page(feed_server):
    finder = FeedFinder(timeout=5)

    page_feeds = finder.find_feeds(f"{feed_server.base_url}/")
    rdf_feeds = finder.find_feeds(f"{feed_server.base_url}/rdf.xml")

    assert page_feeds == [
        Feed(endpoint=f"{feed_server.base_url}/rss.xml", type=FeedType.RSS),
        Feed(endpoint=f"{feed_server.base_url}/atom.xml", type=FeedType.ATOM),
    ]
    assert rdf_feeds == [Feed(endpoint=f"{feed_server.base_url}/rdf.xml", type=FeedType.RDF)]


def test_cli_add_then_fetch_registered_feeds(feed_server, capsys):
    router = CLIRouter()

    assert router.route_command(["feeds", "add", f"{feed_server.base_url}/"]) == 0
    assert router.route_command(["news", "fetch", "--feeds"]) == 0

    out = capsys.readouterr().out
    assert "Total: 5 news items" in out
    assert "[THE GO BLOG] Go 1.22 is released!" in out
