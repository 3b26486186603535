"""NewsSession — the caller-owned context for one board view."""

from .cache import CacheManager, CacheResult
from .log import get_logger
from .sources.base import Category


class NewsSession:
    """Holds the current category selector and routes every load through the cache.

    The periodic scheduler and the visibility trigger both call into the same
    session, so the cache manager's in-flight guard is the only coordination
    they need.
    """

    def __init__(self, manager: CacheManager, category: Category | str | None = None):
        self.manager = manager
        self.category = None if category is None else Category(category)
        self.last_result: CacheResult | None = None

    def select(self, category: Category | str | None) -> CacheResult | None:
        """Switch category and load it (cached when fresh)."""
        self.category = None if category is None else Category(category)
        return self.load()

    def load(self) -> CacheResult | None:
        result = self.manager.load(self.category)
        if result is not None:
            self.last_result = result
        return result

    def force_refresh(self) -> CacheResult | None:
        result = self.manager.force_refresh(self.category)
        if result is not None:
            self.last_result = result
        return result

    def check_and_refresh(self) -> CacheResult | None:
        """Reload only when a stored entry exists and has gone stale."""
        if not self.manager.is_stale(self.category):
            return None
        get_logger().debug("Cache for %s is stale — reloading", self.category or "all")
        return self.load()
