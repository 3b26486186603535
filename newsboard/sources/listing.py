"""Listing-with-children adapter (Reddit .json listings)."""

from urllib.parse import urljoin

from .base import AdapterKind, NewsItem, SourceAdapter, SourceDescriptor, text_field


class ListingAdapter(SourceAdapter):
    kind = AdapterKind.LISTING

    def parse(self, payload, source: SourceDescriptor, fetched_at: int) -> list[NewsItem]:
        children = payload["data"]["children"]
        if not isinstance(children, list):
            raise TypeError("listing children is not a list")

        items = []
        for i, child in enumerate(children):
            d = child.get("data", {})
            if d.get("stickied"):
                continue

            url = text_field(d.get("url"))
            permalink = text_field(d.get("permalink"))
            if not url and permalink:
                url = urljoin(source.homepage, permalink)

            item = self.make_item(
                source,
                self.item_id(source, d.get("id"), i, fetched_at),
                title=d.get("title"),
                url=url or source.link_for(d.get("id")),
                fetched_at=fetched_at,
                description=d.get("selftext", ""),
                timestamp=d.get("created_utc"),
                hot=d.get("score", 0),
            )
            if item:
                items.append(item)
            if len(items) >= self.cap:
                break
        return items
