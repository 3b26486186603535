"""Source catalog + adapter table, validated once at construction."""

from dataclasses import replace

from ..errors import RegistryError
from ..log import get_logger
from .base import AdapterKind, Category, SourceAdapter, SourceDescriptor
from .feed import FeedAdapter
from .flat import FlatAdapter
from .listing import ListingAdapter
from .poll import PollAdapter
from .search import SearchAdapter

ADAPTER_TYPES: dict[AdapterKind, type[SourceAdapter]] = {
    AdapterKind.FEED: FeedAdapter,
    AdapterKind.POLL: PollAdapter,
    AdapterKind.LISTING: ListingAdapter,
    AdapterKind.SEARCH: SearchAdapter,
    AdapterKind.FLAT: FlatAdapter,
}


def build_adapters(http) -> dict[AdapterKind, SourceAdapter]:
    """One adapter instance per kind, all sharing the same HTTP client."""
    missing = set(AdapterKind) - set(ADAPTER_TYPES)
    if missing:
        raise RegistryError(f"no adapter for kinds: {sorted(k.value for k in missing)}")
    return {kind: cls(http) for kind, cls in ADAPTER_TYPES.items()}


DEFAULT_SOURCES = [
    SourceDescriptor(
        id="github",
        name="GitHub Trending",
        category=Category.DEV,
        icon="https://github.githubassets.com/favicons/favicon.svg",
        color="#24292e",
        api="https://rsshub.app/github/trending/daily/any",
        kind=AdapterKind.FEED,
        homepage="https://github.com/trending",
    ),
    SourceDescriptor(
        id="hackernews",
        name="Hacker News",
        category=Category.TECH,
        icon="https://news.ycombinator.com/favicon.ico",
        color="#ff6600",
        api="https://hacker-news.firebaseio.com/v0/topstories.json",
        item_api="https://hacker-news.firebaseio.com/v0/item/{id}.json",
        kind=AdapterKind.POLL,
        homepage="https://news.ycombinator.com/",
        permalink="https://news.ycombinator.com/item?id={id}",
    ),
    SourceDescriptor(
        id="v2ex",
        name="V2EX",
        category=Category.TECH,
        icon="https://www.v2ex.com/static/icon-192.png",
        color="#1a1a1a",
        api="https://www.v2ex.com/api/topics/hot.json",
        kind=AdapterKind.FLAT,
        homepage="https://www.v2ex.com/",
        permalink="https://www.v2ex.com/t/{id}",
    ),
    SourceDescriptor(
        id="zhihu",
        name="Zhihu Hot List",
        category=Category.GENERAL,
        icon="https://static.zhihu.com/heifetz/favicon.ico",
        color="#0084ff",
        api="https://rsshub.app/zhihu/hotlist",
        kind=AdapterKind.FEED,
        homepage="https://www.zhihu.com/hot",
    ),
    SourceDescriptor(
        id="weibo",
        name="Weibo Hot Search",
        category=Category.GENERAL,
        icon="https://weibo.com/favicon.ico",
        color="#ff8200",
        api="https://rsshub.app/weibo/search/hot",
        kind=AdapterKind.FEED,
        homepage="https://s.weibo.com/top/summary",
    ),
    SourceDescriptor(
        id="kr36",
        name="36Kr",
        category=Category.TECH,
        icon="https://36kr.com/favicon.ico",
        color="#0076f6",
        api="https://rsshub.app/36kr/newsflashes",
        kind=AdapterKind.FEED,
        homepage="https://36kr.com/newsflashes",
    ),
    SourceDescriptor(
        id="arxiv",
        name="arXiv CS",
        category=Category.ACADEMIC,
        icon="https://arxiv.org/favicon.ico",
        color="#b31b1b",
        api="https://rsshub.app/arxiv/cs.AI",
        kind=AdapterKind.FEED,
        homepage="https://arxiv.org/list/cs.AI/recent",
    ),
    SourceDescriptor(
        id="producthunt",
        name="Product Hunt",
        category=Category.TECH,
        icon="https://ph-static.imgix.net/ph-favicon.ico",
        color="#da552f",
        api="https://rsshub.app/producthunt/today",
        kind=AdapterKind.FEED,
        homepage="https://www.producthunt.com/",
    ),
    SourceDescriptor(
        id="reddit",
        name="r/programming",
        category=Category.DEV,
        icon="https://www.reddit.com/favicon.ico",
        color="#ff4500",
        api="https://www.reddit.com/r/programming/hot.json?limit=25",
        kind=AdapterKind.LISTING,
        homepage="https://www.reddit.com",
        permalink="https://www.reddit.com/r/programming/comments/{id}",
    ),
    SourceDescriptor(
        id="github-popular",
        name="GitHub Popular Repos",
        category=Category.DEV,
        icon="https://github.githubassets.com/favicons/favicon.svg",
        color="#6e5494",
        api="https://api.github.com/search/repositories?q=stars:>50&sort=stars&order=desc&per_page=20",
        kind=AdapterKind.SEARCH,
        homepage="https://github.com/",
        permalink="https://github.com/{id}",
    ),
]


def _coerce(desc: SourceDescriptor) -> SourceDescriptor:
    try:
        category = Category(desc.category)
    except ValueError:
        raise RegistryError(f"{desc.id}: unknown category {desc.category!r}") from None
    try:
        kind = AdapterKind(desc.kind)
    except ValueError:
        raise RegistryError(f"{desc.id}: unknown adapter kind {desc.kind!r}") from None
    if kind is AdapterKind.POLL and "{id}" not in desc.item_api:
        raise RegistryError(f"{desc.id}: poll sources need an item_api containing {{id}}")
    if not desc.id or not desc.api:
        raise RegistryError(f"source {desc.name!r} is missing an id or api endpoint")
    return replace(desc, category=category, kind=kind)


class SourceRegistry:
    """Read-only mapping of source id -> SourceDescriptor.

    Construction rejects duplicate ids, unknown categories, unknown adapter
    kinds and poll sources without a per-item endpoint, so lookups later on
    never meet a descriptor the adapter set cannot handle.
    """

    def __init__(self, descriptors=None):
        self._sources: dict[str, SourceDescriptor] = {}
        for desc in DEFAULT_SOURCES if descriptors is None else descriptors:
            desc = _coerce(desc)
            if desc.id in self._sources:
                raise RegistryError(f"duplicate source id: {desc.id}")
            self._sources[desc.id] = desc

    def __iter__(self):
        return iter(self._sources.values())

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, source_id) -> bool:
        return source_id in self._sources

    def get(self, source_id: str) -> SourceDescriptor | None:
        return self._sources.get(source_id)

    def active(self, category: Category | str | None = None) -> list[SourceDescriptor]:
        """Enabled sources, optionally restricted to one category, in catalog order."""
        if category is not None:
            category = Category(category)
        return [
            s for s in self._sources.values()
            if s.enabled and (category is None or s.category is category)
        ]

    def kinds(self) -> set[AdapterKind]:
        return {s.kind for s in self._sources.values()}

    def with_overrides(self, overrides: dict) -> "SourceRegistry":
        """Apply the config `sources` section, e.g. {"weibo": {"enabled": False}}."""
        descriptors = []
        for desc in self._sources.values():
            override = overrides.get(desc.id, {})
            enabled = override.get("enabled") if isinstance(override, dict) else None
            if isinstance(enabled, bool):
                desc = replace(desc, enabled=enabled)
            descriptors.append(desc)
        for source_id in overrides:
            if source_id not in self._sources:
                get_logger().warning("Config overrides unknown source: %s", source_id)
        return SourceRegistry(descriptors)
