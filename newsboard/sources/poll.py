"""Poll-by-id adapter: an id list plus one detail request per id (Hacker News)."""

from ..concurrency import gather_settled
from ..config import POLL_CAP
from ..log import source_logger
from .base import AdapterKind, NewsItem, SourceAdapter, SourceDescriptor


class PollAdapter(SourceAdapter):
    kind = AdapterKind.POLL
    cap = POLL_CAP

    def _detail(self, source: SourceDescriptor, native_id):
        return self.http.get_json(source.item_api.replace("{id}", str(native_id)))

    def parse(self, payload, source: SourceDescriptor, fetched_at: int) -> list[NewsItem]:
        if not isinstance(payload, list):
            raise TypeError(f"expected id list, got {type(payload).__name__}")

        ids = payload[:self.cap]
        details = gather_settled(
            [lambda native_id=native_id: self._detail(source, native_id) for native_id in ids],
            max_workers=self.cap,
        )

        items = []
        for i, (native_id, settled) in enumerate(zip(ids, details)):
            if not settled.ok:
                source_logger(source.id).debug("item %s failed: %s", native_id, settled.error)
                continue
            detail = settled.value
            if not isinstance(detail, dict):
                continue
            item = self.make_item(
                source,
                self.item_id(source, detail.get("id", native_id), i, fetched_at),
                title=detail.get("title"),
                url=detail.get("url") or source.link_for(detail.get("id", native_id)),
                fetched_at=fetched_at,
                description=detail.get("text", ""),
                timestamp=detail.get("time"),
                hot=detail.get("score", 0),
            )
            if item:
                items.append(item)
        return items
