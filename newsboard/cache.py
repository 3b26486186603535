"""Time-boxed read-through cache keyed by category selector."""

import json
import os
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from .config import CACHE_DURATION_MS, CACHE_KEY_PREFIX
from .errors import AllSourcesFailed
from .fetcher import NewsFetcher
from .log import get_logger, log
from .sources.base import Category, NewsItem, now_ms


class JsonFileStore:
    """Durable key-value store: one JSON file per key.

    `get` returns None for a missing key and raises ValueError when the file
    exists but is not valid JSON; callers decide what corruption means.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str):
        path = self._path(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def set(self, key: str, value):
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, path)

    def remove(self, key: str):
        self._path(key).unlink(missing_ok=True)


class CacheState(str, Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"
    LOADING = "loading"


@dataclass
class CacheResult:
    items: list[NewsItem]
    timestamp: int  # epoch ms the batch was produced
    from_cache: bool = False


def cache_key(category: Category | str | None = None) -> str:
    if category is None:
        return CACHE_KEY_PREFIX + "all"
    return CACHE_KEY_PREFIX + Category(category).value


class CacheManager:
    """Wraps a NewsFetcher with a per-category cache entry.

    Only one load per key may be in flight; a concurrent load for the same
    key is ignored (returns None). Different keys load independently.
    """

    def __init__(self, fetcher: NewsFetcher, store: JsonFileStore,
                 duration_ms: int = CACHE_DURATION_MS, clock: Callable[[], int] = now_ms):
        self.fetcher = fetcher
        self.store = store
        self.duration_ms = duration_ms
        self.clock = clock
        self._lock = threading.Lock()
        self._loading: set[str] = set()

    # ─────────────────────────────────────────────────────
    # Reading the stored entry
    # ─────────────────────────────────────────────────────
    def _read(self, key: str) -> CacheResult | None:
        """Stored entry for a key, or None if missing or unreadable."""
        try:
            record = self.store.get(key)
            if record is None:
                return None
            timestamp = record["timestamp"]
            if isinstance(timestamp, bool) or not isinstance(timestamp, int):
                raise TypeError("timestamp is not an integer")
            items = [NewsItem.from_dict(d) for d in record["data"]]
        except Exception as e:
            get_logger().warning("Cache parse error for %s: %s", key, e)
            return None
        return CacheResult(items=items, timestamp=timestamp, from_cache=True)

    def _is_fresh(self, entry: CacheResult) -> bool:
        return self.clock() - entry.timestamp < self.duration_ms

    def age(self, category=None) -> int | None:
        """Milliseconds since the stored entry was produced, or None."""
        entry = self._read(cache_key(category))
        return None if entry is None else self.clock() - entry.timestamp

    def state(self, category=None) -> CacheState:
        key = cache_key(category)
        with self._lock:
            if key in self._loading:
                return CacheState.LOADING
        entry = self._read(key)
        if entry is None:
            return CacheState.EMPTY
        return CacheState.FRESH if self._is_fresh(entry) else CacheState.STALE

    def is_stale(self, category=None) -> bool:
        return self.state(category) is CacheState.STALE

    # ─────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────
    def load(self, category=None) -> CacheResult | None:
        """Serve a fresh entry, otherwise fetch and store a new batch.

        Raises AllSourcesFailed when every selected source failed; the
        stored entry is left as it was.
        """
        key = cache_key(category)
        entry = self._read(key)
        if entry is not None and self._is_fresh(entry):
            get_logger().debug("Cache hit for %s", key)
            return entry
        return self._refresh(key, category)

    def force_refresh(self, category=None) -> CacheResult | None:
        """Drop the stored entry and fetch immediately."""
        key = cache_key(category)
        self.store.remove(key)
        return self._refresh(key, category)

    def invalidate(self, category=None):
        self.store.remove(cache_key(category))

    def _refresh(self, key: str, category) -> CacheResult | None:
        with self._lock:
            if key in self._loading:
                get_logger().debug("Load for %s already in flight — ignoring", key)
                return None
            self._loading.add(key)

        try:
            report = self.fetcher.collect(category)
            if report.all_failed:
                raise AllSourcesFailed(report.errors)

            timestamp = self.clock()
            self.store.set(key, {
                "data": [item.to_dict() for item in report.items],
                "timestamp": timestamp,
            })
            log(f"Cached {len(report.items)} items under {key}")
            return CacheResult(items=report.items, timestamp=timestamp)
        finally:
            with self._lock:
                self._loading.discard(key)
