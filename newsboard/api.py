"""Module-level entry points backed by lazily built default instances."""

from .cache import CacheManager, CacheResult, JsonFileStore
from .config import (
    CACHE_DIR,
    get_cache_duration_ms,
    get_request_timeout,
    get_source_overrides,
    load_config,
)
from .fetcher import NewsFetcher
from .http import HttpClient
from .sources.base import NewsItem
from .sources.registry import SourceRegistry, build_adapters

_fetcher = None
_manager = None


def get_fetcher() -> NewsFetcher:
    """Build the default fetcher from config.json on first use."""
    global _fetcher
    if _fetcher is None:
        config = load_config()
        registry = SourceRegistry().with_overrides(get_source_overrides(config))
        http = HttpClient(timeout=get_request_timeout(config))
        _fetcher = NewsFetcher(registry, build_adapters(http))
    return _fetcher


def get_cache_manager() -> CacheManager:
    global _manager
    if _manager is None:
        _manager = CacheManager(
            get_fetcher(),
            JsonFileStore(CACHE_DIR),
            duration_ms=get_cache_duration_ms(),
        )
    return _manager


def reset():
    """Forget the default instances (picks up config.json changes)."""
    global _fetcher, _manager
    _fetcher = None
    _manager = None


def fetch_source_news(source_id: str) -> list[NewsItem]:
    return get_fetcher().fetch_one(source_id)


def fetch_all_news(category=None) -> list[NewsItem]:
    return get_fetcher().fetch_all(category)


def load_with_cache(category=None) -> CacheResult | None:
    return get_cache_manager().load(category)


def force_refresh(category=None) -> CacheResult | None:
    return get_cache_manager().force_refresh(category)
