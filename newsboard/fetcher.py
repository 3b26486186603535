"""NewsFetcher — fans out to every active source, merges, sorts by time."""

from dataclasses import dataclass, field

from .concurrency import gather_settled
from .config import MAX_WORKERS
from .errors import RegistryError
from .log import log, source_logger
from .sources.base import AdapterKind, Category, NewsItem, SourceAdapter, SourceDescriptor
from .sources.registry import SourceRegistry


@dataclass
class FetchReport:
    """Merged batch plus what each source contributed or why it failed."""
    items: list[NewsItem] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    errors: dict[str, BaseException] = field(default_factory=dict)

    @property
    def attempted(self) -> int:
        return len(self.counts) + len(self.errors)

    @property
    def all_failed(self) -> bool:
        return self.attempted > 0 and not self.counts


class NewsFetcher:
    """Per-source failures are isolated; a batch never raises."""

    def __init__(self, registry: SourceRegistry, adapters: dict[AdapterKind, SourceAdapter],
                 max_workers: int = MAX_WORKERS):
        missing = registry.kinds() - set(adapters)
        if missing:
            raise RegistryError(f"no adapter for kinds: {sorted(k.value for k in missing)}")
        self.registry = registry
        self.adapters = adapters
        self.max_workers = max_workers

    def _fetch(self, source: SourceDescriptor) -> list[NewsItem]:
        """Fetch + normalize one source. Network errors propagate."""
        items = self.adapters[source.kind].fetch(source)
        source_logger(source.id).debug("%d items", len(items))
        return items

    def fetch_one(self, source_id: str) -> list[NewsItem]:
        """Items for a single source, or [] if it is unknown, disabled or failing."""
        source = self.registry.get(source_id)
        if source is None or not source.enabled:
            return []
        try:
            return self._fetch(source)
        except Exception as e:
            source_logger(source.id).error("fetch failed: %s", e)
            return []

    def collect(self, category: Category | str | None = None) -> FetchReport:
        """Fetch every active source concurrently and wait for all of them."""
        sources = self.registry.active(category)
        settled = gather_settled(
            [lambda s=s: self._fetch(s) for s in sources],
            max_workers=self.max_workers,
        )

        report = FetchReport()
        for source, outcome in zip(sources, settled):
            if outcome.ok:
                report.items.extend(outcome.value)
                report.counts[source.id] = len(outcome.value)
            else:
                report.errors[source.id] = outcome.error
                source_logger(source.id).error("fetch failed: %s", outcome.error)

        # Most recent first; sort is stable so ties keep source order
        report.items.sort(key=lambda item: item.timestamp, reverse=True)
        log(f"Fetched {len(report.items)} items from {len(report.counts)}/{report.attempted} sources")
        return report

    def fetch_all(self, category: Category | str | None = None) -> list[NewsItem]:
        return self.collect(category).items
