import json
from unittest.mock import MagicMock

import pytest

from conftest import FakeSource, make_news
from cli_router import CLIRouter
from commands import get_command
from commands import news as news_command
from core.aggregator import Aggregator
from core.config import ConfigManager
from core.container import Container
from core.exceptions import FeedTypeError, SourceConnectionError
from core.models.news import Feed, FeedType
from core.sampler import NewsSampler
from core.store import FeedStore


@pytest.fixture
def container(tmp_path):
    container = Container()
    container.register_instance("config", ConfigManager().get_config())
    container.register_instance("feed_store", FeedStore(tmp_path / "feeds.json"))
    container.register_instance("feed_finder", MagicMock())
    container.register_instance("sampler", NewsSampler(show_max_news=2))
    return container


@pytest.fixture
def router(container):
    return CLIRouter(container)


def use_sources(monkeypatch, sources):
    captured = {}

    def build(config, names=None):
        captured["names"] = names
        return Aggregator.from_sources(sources)

    monkeypatch.setattr(news_command, "build_source_aggregator", build)
    return captured


def test_news_fetch_prints_every_item(router, monkeypatch, capsys):
    captured = use_sources(monkeypatch, [FakeSource("alpha", make_news(3, "alpha"))])

    exit_code = router.route_command(["news", "fetch", "--sources", "alpha"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert captured["names"] == ["alpha"]
    assert "[ALPHA] alpha story 0\n    https://alpha.example/0" in out
    assert "Total: 3 news items" in out


def test_news_fetch_random_page(router, monkeypatch, capsys):
    use_sources(monkeypatch, [FakeSource("alpha", make_news(5, "alpha"))])

    exit_code = router.route_command(["news", "fetch", "--random"])

    assert exit_code == 0
    assert "Total: 2 news items" in capsys.readouterr().out


def test_news_fetch_failed_cycle_prints_partial_pool(router, monkeypatch, capsys):
    broken = FakeSource("broken", error=SourceConnectionError("broken", "http://127.0.0.1:1/", OSError("refused")))
    use_sources(monkeypatch, [FakeSource("alpha", make_news(2, "alpha")), broken])

    exit_code = router.route_command(["news", "fetch"])

    assert exit_code == 1
    assert "Total: 2 news items" in capsys.readouterr().out


def test_news_fetch_registered_feeds(router, container, capsys):
    container.register_instance("feed_aggregator", Aggregator.from_sources([FakeSource("feed", make_news(1, "feed"))]))

    assert router.route_command(["news", "fetch", "--feeds"]) == 0
    assert "[FEED] feed story 0" in capsys.readouterr().out


def test_feeds_add_registers_and_saves(router, container, tmp_path, capsys):
    container.get("feed_finder").find_feeds.return_value = [
        Feed(endpoint="https://blog.example/rss", type=FeedType.RSS),
        Feed(endpoint="https://blog.example/atom", type=FeedType.ATOM),
    ]

    exit_code = router.route_command(["feeds", "add", " https://blog.example/ "])

    assert exit_code == 0
    container.get("feed_finder").find_feeds.assert_called_once_with("https://blog.example/")
    assert len(FeedStore.open(tmp_path / "feeds.json")) == 2
    assert "Added" in capsys.readouterr().out


def test_feeds_add_discovery_failure(router, container):
    container.get("feed_finder").find_feeds.side_effect = FeedTypeError("unexpected content type: 'application/json'")

    assert router.route_command(["feeds", "add", "https://api.example/"]) == 69
    assert len(container.get("feed_store")) == 0


def test_feeds_add_nothing_found(router, container):
    container.get("feed_finder").find_feeds.return_value = []

    assert router.route_command(["feeds", "add", "https://plain.example/"]) == 1


def test_feeds_list_and_delete_by_prefix(router, container, capsys):
    store = container.get("feed_store")
    stored = store.add(Feed(endpoint="https://blog.example/rss", type=FeedType.RSS))

    assert router.route_command(["feeds", "list"]) == 0
    assert "https://blog.example/rss" in capsys.readouterr().out

    assert router.route_command(["feeds", "delete", stored.id[:8]]) == 0
    assert len(store) == 0
    assert router.route_command(["feeds", "delete", stored.id]) == 1


def test_sources_list(router, capsys):
    assert router.route_command(["sources", "list"]) == 0

    out = capsys.readouterr().out
    assert "hackernews" in out
    assert "theguardian" in out
    assert "(not configured)" in out


def test_missing_command_and_subcommand(router):
    assert router.route_command([]) == 1
    assert router.route_command(["feeds"]) == 0  # prints the feeds help


def test_unknown_subcommand_is_rejected_by_parser(router):
    assert router.route_command(["feeds", "explode"]) == 2


def test_get_command_unknown_name():
    with pytest.raises(ValueError, match="Unknown command"):
        get_command("nope")


def test_news_fetch_json_output(router, monkeypatch, capsys):
    use_sources(monkeypatch, [FakeSource("alpha", make_news(2, "alpha"))])

    assert router.route_command(["news", "fetch", "--json"]) == 0

    items = json.loads(capsys.readouterr().out)
    assert [item["title"] for item in items] == ["alpha story 0", "alpha story 1"]
    assert set(items[0]) == {"feed", "title", "url"}
