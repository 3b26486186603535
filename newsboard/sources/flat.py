"""Flat-array adapter (V2EX hot topics)."""

from .base import AdapterKind, NewsItem, SourceAdapter, SourceDescriptor


class FlatAdapter(SourceAdapter):
    kind = AdapterKind.FLAT

    def parse(self, payload, source: SourceDescriptor, fetched_at: int) -> list[NewsItem]:
        if not isinstance(payload, list):
            raise TypeError(f"expected array, got {type(payload).__name__}")

        items = []
        for i, entry in enumerate(payload[:self.cap]):
            native_id = entry.get("id")
            item = self.make_item(
                source,
                self.item_id(source, native_id, i, fetched_at),
                title=entry.get("title"),
                url=entry.get("url") or entry.get("link") or source.link_for(native_id),
                fetched_at=fetched_at,
                description=entry.get("content", ""),
                timestamp=entry.get("created"),
                hot=entry.get("replies", 0),
            )
            if item:
                items.append(item)
        return items
