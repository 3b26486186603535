"""Tests for newsboard/__main__.py and newsboard/api.py."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from newsboard import api
from newsboard.__main__ import format_time_ago, main, print_items
from newsboard.cache import CacheManager, CacheResult
from newsboard.errors import AllSourcesFailed
from newsboard.fetcher import NewsFetcher
from newsboard.sources.base import NewsItem

NOW = 1_700_000_000_000


class TestFormatTimeAgo:
    def test_just_now(self):
        assert format_time_ago(NOW - 30_000, now=NOW) == "just now"

    def test_minutes(self):
        assert format_time_ago(NOW - 5 * 60_000, now=NOW) == "5 min ago"

    def test_hours(self):
        assert format_time_ago(NOW - 3 * 3_600_000, now=NOW) == "3 h ago"

    def test_days(self):
        assert format_time_ago(NOW - 2 * 86_400_000, now=NOW) == "2 d ago"

    def test_older_shows_date(self):
        label = format_time_ago(NOW - 30 * 86_400_000, now=NOW)
        assert "ago" not in label
        assert label.split()[0].isalpha()


class TestPrintItems:
    def test_empty(self, capsys):
        print_items([], 10)
        assert "No news" in capsys.readouterr().out

    def test_hot_badge(self, capsys):
        items = [
            NewsItem(id="a", title="Hot one", url="https://a", source_name="A", hot=99),
            NewsItem(id="b", title="Cold one", url="https://b", source_name="B", hot=3),
        ]
        print_items(items, 10)
        out = capsys.readouterr().out
        assert "[A] Hot one [99]" in out
        assert "[B] Cold one\n" in out


class TestApi:
    def setup_method(self):
        api.reset()

    def teardown_method(self):
        api.reset()

    @patch("newsboard.api.load_config", return_value={"sources": {"weibo": {"enabled": False}}})
    def test_default_fetcher_applies_config(self, _):
        fetcher = api.get_fetcher()
        assert isinstance(fetcher, NewsFetcher)
        assert fetcher.registry.get("weibo").enabled is False
        assert api.get_fetcher() is fetcher

    def test_default_manager(self):
        manager = api.get_cache_manager()
        assert isinstance(manager, CacheManager)
        assert manager.fetcher is api.get_fetcher()

    def test_entry_points_delegate(self):
        fetcher = MagicMock()
        manager = MagicMock()
        with patch.object(api, "_fetcher", fetcher), patch.object(api, "_manager", manager):
            api.fetch_source_news("hackernews")
            api.fetch_all_news("tech")
            api.load_with_cache("dev")
            api.force_refresh(None)

        fetcher.fetch_one.assert_called_once_with("hackernews")
        fetcher.fetch_all.assert_called_once_with("tech")
        manager.load.assert_called_once_with("dev")
        manager.force_refresh.assert_called_once_with(None)


class TestMain:
    def run(self, *argv):
        with patch.object(sys, "argv", ["newsboard", *argv]):
            main()

    def test_no_command_prints_help(self, capsys):
        self.run()
        assert "usage" in capsys.readouterr().out

    def test_sources(self, capsys):
        self.run("sources", "--category", "academic")
        out = capsys.readouterr().out
        assert "arxiv" in out
        assert "hackernews" not in out

    @patch("newsboard.api.load_with_cache")
    def test_load(self, mock_load, capsys):
        mock_load.return_value = CacheResult(
            items=[NewsItem(id="a", title="Cached story", url="https://a", source_name="A")],
            timestamp=NOW,
            from_cache=True,
        )
        self.run("load", "--category", "tech")
        mock_load.assert_called_once_with("tech")
        out = capsys.readouterr().out
        assert "Cached story" in out
        assert "cached for 30 minutes" in out

    @patch("newsboard.api.force_refresh")
    def test_load_force(self, mock_force, capsys):
        mock_force.return_value = CacheResult(items=[], timestamp=NOW)
        self.run("load", "--force")
        mock_force.assert_called_once_with(None)

    @patch("newsboard.api.load_with_cache")
    def test_load_total_failure_exits(self, mock_load, capsys):
        mock_load.side_effect = AllSourcesFailed({"hackernews": RuntimeError("down")})
        with pytest.raises(SystemExit):
            self.run("load")
        assert "Load failed" in capsys.readouterr().out

    @patch("newsboard.api.fetch_source_news", return_value=[])
    def test_fetch_single_source(self, mock_fetch, capsys):
        self.run("fetch", "--source", "v2ex")
        mock_fetch.assert_called_once_with("v2ex")

    @patch("newsboard.api.get_cache_manager")
    def test_clear(self, mock_manager, capsys):
        self.run("clear", "--category", "dev")
        mock_manager.return_value.invalidate.assert_called_once_with("dev")

    @patch("newsboard.__main__.save_config")
    @patch("newsboard.__main__.load_config")
    def test_sources_disable_writes_override(self, mock_load, mock_save, capsys):
        mock_load.return_value = {"cache_minutes": 10, "sources": {"weibo": {"enabled": False}}}
        self.run("sources", "--disable", "zhihu")
        mock_save.assert_called_once_with({
            "cache_minutes": 10,
            "sources": {"weibo": {"enabled": False}, "zhihu": {"enabled": False}},
        })
        assert "Disabled zhihu" in capsys.readouterr().out

    @patch("newsboard.__main__.save_config")
    @patch("newsboard.__main__.load_config", return_value={})
    def test_sources_enable_creates_section(self, mock_load, mock_save, capsys):
        self.run("sources", "--enable", "weibo")
        mock_save.assert_called_once_with({"sources": {"weibo": {"enabled": True}}})

    @patch("newsboard.__main__.save_config")
    @patch("newsboard.__main__.load_config", return_value={})
    def test_sources_toggle_unknown_id_exits(self, mock_load, mock_save, capsys):
        with pytest.raises(SystemExit):
            self.run("sources", "--enable", "myspace")
        mock_save.assert_not_called()
        assert "Unknown source: myspace" in capsys.readouterr().out
