"""RSS/Atom feed adapter (RSSHub mirrors, arXiv, Product Hunt, ...)."""

import io

import feedparser

from ..config import FEED_CAP
from .base import AdapterKind, NewsItem, SourceAdapter, SourceDescriptor


class FeedAdapter(SourceAdapter):
    """Feed order encodes rank, so `hot` is synthesized as cap - position."""

    kind = AdapterKind.FEED
    cap = FEED_CAP

    def load(self, source: SourceDescriptor) -> bytes:
        return self.http.get_bytes(source.api)

    def parse(self, payload, source: SourceDescriptor, fetched_at: int) -> list[NewsItem]:
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        if not isinstance(payload, bytes):
            raise TypeError(f"expected feed document, got {type(payload).__name__}")

        # A stream keeps feedparser from treating the payload as a path or URL
        feed = feedparser.parse(io.BytesIO(payload))

        items = []
        for i, entry in enumerate(feed.entries[:self.cap]):
            item = self.make_item(
                source,
                self.item_id(source, None, i, fetched_at),
                title=entry.get("title", ""),
                url=entry.get("link", ""),
                fetched_at=fetched_at,
                description=entry.get("summary", ""),
                timestamp=entry.get("published_parsed") or entry.get("updated_parsed"),
                hot=self.cap - i,
            )
            if item:
                items.append(item)
        return items
