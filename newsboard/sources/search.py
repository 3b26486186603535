"""Search-result adapter (GitHub repository search)."""

from .base import AdapterKind, NewsItem, SourceAdapter, SourceDescriptor, text_field


class SearchAdapter(SourceAdapter):
    kind = AdapterKind.SEARCH

    def parse(self, payload, source: SourceDescriptor, fetched_at: int) -> list[NewsItem]:
        results = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            return []

        items = []
        for i, entry in enumerate(results[:self.cap]):
            name = text_field(entry.get("full_name") or entry.get("name"))
            summary = text_field(entry.get("description"))
            title = f"{name}: {summary}" if name and summary else name or summary

            item = self.make_item(
                source,
                self.item_id(source, entry.get("id"), i, fetched_at),
                title=title,
                url=entry.get("html_url") or source.link_for(name),
                fetched_at=fetched_at,
                description=summary,
                timestamp=entry.get("created_at"),
                hot=entry.get("stargazers_count", 0),
            )
            if item:
                items.append(item)
        return items
