"""Tests for newsboard/config.py — config.json resolution and accessors."""

import json
from unittest.mock import patch

from newsboard.config import (
    AUTO_REFRESH_INTERVAL,
    CACHE_DURATION_MS,
    REQUEST_TIMEOUT,
    get_cache_duration_ms,
    get_refresh_interval,
    get_request_timeout,
    get_source_overrides,
    load_config,
    save_config,
)


class TestLoadConfig:
    @patch("newsboard.config.CONFIG_FILE")
    def test_loads_valid_json(self, mock_path):
        mock_path.exists.return_value = True
        mock_path.read_text.return_value = json.dumps({"key": "value"})
        assert load_config() == {"key": "value"}

    @patch("newsboard.config.CONFIG_FILE")
    def test_returns_empty_for_missing(self, mock_path):
        mock_path.exists.return_value = False
        assert load_config() == {}

    @patch("newsboard.config.CONFIG_FILE")
    def test_returns_empty_for_invalid_json(self, mock_path):
        mock_path.exists.return_value = True
        mock_path.read_text.return_value = "not json"
        assert load_config() == {}

    @patch("newsboard.config.CONFIG_FILE")
    def test_returns_empty_for_non_object(self, mock_path):
        mock_path.exists.return_value = True
        mock_path.read_text.return_value = "[1, 2]"
        assert load_config() == {}


class TestSaveConfig:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "home" / "config.json"
        with patch("newsboard.config.CONFIG_FILE", path), \
                patch("newsboard.config.HOME_DIR", path.parent):
            save_config({"cache_minutes": 5})
            assert load_config() == {"cache_minutes": 5}
        assert path.stat().st_mode & 0o777 == 0o600


class TestAccessors:
    def test_defaults(self):
        assert get_cache_duration_ms({}) == CACHE_DURATION_MS
        assert get_refresh_interval({}) == AUTO_REFRESH_INTERVAL
        assert get_request_timeout({}) == REQUEST_TIMEOUT
        assert get_source_overrides({}) == {}

    def test_overrides(self):
        config = {"cache_minutes": 10, "refresh_minutes": 2, "request_timeout": 3}
        assert get_cache_duration_ms(config) == 600_000
        assert get_refresh_interval(config) == 120
        assert get_request_timeout(config) == 3.0

    def test_invalid_values_fall_back(self):
        config = {"cache_minutes": -1, "refresh_minutes": "often", "request_timeout": True}
        assert get_cache_duration_ms(config) == CACHE_DURATION_MS
        assert get_refresh_interval(config) == AUTO_REFRESH_INTERVAL
        assert get_request_timeout(config) == REQUEST_TIMEOUT

    def test_source_overrides(self):
        assert get_source_overrides({"sources": {"weibo": {"enabled": False}}}) == {
            "weibo": {"enabled": False}
        }
        assert get_source_overrides({"sources": ["weibo"]}) == {}
