"""Canonical item, source descriptor, and the SourceAdapter ABC."""

import calendar
import html
import math
import re
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum

from ..config import DESCRIPTION_LIMIT, FEED_CAP
from ..log import source_logger


class Category(str, Enum):
    TECH = "tech"
    ACADEMIC = "academic"
    GENERAL = "general"
    DEV = "dev"

    @property
    def label(self) -> str:
        return CATEGORIES[self]["name"]


CATEGORIES = {
    Category.TECH: {"name": "Technology", "icon": "icon-desktop", "color": "#3498db"},
    Category.ACADEMIC: {"name": "Academic", "icon": "icon-graduation-cap", "color": "#9b59b6"},
    Category.GENERAL: {"name": "General", "icon": "icon-fire", "color": "#e74c3c"},
    Category.DEV: {"name": "Developer", "icon": "icon-code", "color": "#2ecc71"},
}


class AdapterKind(str, Enum):
    FEED = "feed"  # RSS/Atom document
    POLL = "poll"  # list of ids + one detail request per id
    LISTING = "listing"  # {"data": {"children": [...]}} with sticky flags
    SEARCH = "search"  # {"items": [...]} search response
    FLAT = "flat"  # bare JSON array


@dataclass(frozen=True)
class SourceDescriptor:
    """One upstream provider. Immutable once the registry is built."""
    id: str
    name: str
    category: Category
    icon: str
    color: str
    api: str
    kind: AdapterKind
    enabled: bool = True
    item_api: str = ""  # poll sources only, contains "{id}"
    homepage: str = ""  # base for synthesized fallback links
    permalink: str = ""  # fallback link template, contains "{id}"

    def link_for(self, native_id) -> str:
        if self.permalink and native_id not in (None, ""):
            return self.permalink.replace("{id}", str(native_id))
        return self.homepage


@dataclass
class NewsItem:
    """A normalized, display-ready entry from any source."""
    id: str
    title: str
    url: str
    description: str = ""
    source_name: str = ""
    source_id: str = ""
    source_icon: str = ""
    source_color: str = ""
    timestamp: int = 0  # epoch milliseconds
    hot: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "NewsItem":
        """Rebuild an item from its to_dict() form. Raises on missing or mistyped fields."""
        kwargs = {f.name: data[f.name] for f in fields(cls)}
        if not isinstance(kwargs["id"], str) or not isinstance(kwargs["title"], str):
            raise TypeError("id and title must be strings")
        if not isinstance(kwargs["timestamp"], int) or not isinstance(kwargs["hot"], int):
            raise TypeError("timestamp and hot must be integers")
        return cls(**kwargs)


# ─────────────────────────────────────────────────────
# Normalization helpers shared by every adapter
# ─────────────────────────────────────────────────────
_TAG_RE = re.compile(r"<[^>]*>")


def now_ms() -> int:
    return int(time.time() * 1000)


def strip_markup(text) -> str:
    """Drop HTML tags, decode entities, and collapse whitespace."""
    if not isinstance(text, str):
        return ""
    text = html.unescape(_TAG_RE.sub(" ", text))
    return " ".join(text.split())


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    return text[:limit]


# Epoch values at or above this are already milliseconds (1e11 s is year 5138)
_MS_THRESHOLD = 1e11


def _number_to_ms(value: float) -> float:
    return value if abs(value) >= _MS_THRESHOLD else value * 1000


def to_epoch_ms(value, default: int) -> int:
    """Convert an upstream date to epoch milliseconds.

    Numbers (and numeric strings) are epoch seconds, or milliseconds when
    they are 1e11 or larger. Other strings may be ISO-8601 or RFC-822.
    Anything missing, unparseable, negative or non-finite yields `default`.
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        if isinstance(value, time.struct_time):
            ms = calendar.timegm(value) * 1000
        elif isinstance(value, (int, float)):
            ms = _number_to_ms(float(value))
        elif isinstance(value, str):
            ms = _parse_date_string(value.strip())
            if ms is None:
                return default
        else:
            return default
        if not math.isfinite(ms) or ms < 0:
            return default
        return int(ms)
    except (OverflowError, ValueError, TypeError):
        return default


def _parse_date_string(text: str) -> float | None:
    if not text:
        return None
    try:
        return _number_to_ms(float(text))
    except ValueError:
        pass

    dt = None
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        try:
            dt = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp() * 1000


def to_hot(value) -> int:
    """Coerce a popularity field to a non-negative int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    try:
        return max(0, int(value)) if math.isfinite(value) else 0
    except OverflowError:
        return 0


def text_field(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def plain_text(value) -> str:
    """Collapse whitespace in an already-plain string; titles keep their `<` and `>`."""
    return " ".join(value.split()) if isinstance(value, str) else ""


class SourceAdapter(ABC):
    """Normalizes one upstream payload shape into NewsItems.

    `load` does the network call and may raise SourceUnavailable.
    `normalize` never raises: a payload it does not understand yields [].
    """

    kind: AdapterKind
    cap: int = FEED_CAP

    def __init__(self, http):
        self.http = http

    def load(self, source: SourceDescriptor):
        """Fetch the raw payload for a source."""
        return self.http.get_json(source.api)

    @abstractmethod
    def parse(self, payload, source: SourceDescriptor, fetched_at: int) -> list[NewsItem]:
        """Shape-specific mapping. May raise on unexpected structure."""
        ...

    def normalize(self, payload, source: SourceDescriptor) -> list[NewsItem]:
        try:
            items = self.parse(payload, source, now_ms())
        except Exception as e:
            source_logger(source.id).warning("unexpected %s payload (%s: %s)",
                                             self.kind.value, type(e).__name__, e)
            return []
        return items[:self.cap]

    def fetch(self, source: SourceDescriptor) -> list[NewsItem]:
        return self.normalize(self.load(source), source)

    @staticmethod
    def item_id(source: SourceDescriptor, native_id, index: int, fetched_at: int) -> str:
        """`<source>-<native id>`, or `<source>-<index>-<fetch time>` without a native id."""
        if native_id is None or isinstance(native_id, bool) or str(native_id).strip() == "":
            return f"{source.id}-{index}-{fetched_at}"
        return f"{source.id}-{native_id}"

    def make_item(self, source: SourceDescriptor, item_id: str, title, url, fetched_at: int,
                  description="", timestamp=None, hot=0) -> NewsItem | None:
        """Build a structurally complete NewsItem, or None when there is no title."""
        title = plain_text(title)
        if not title:
            return None
        return NewsItem(
            id=item_id,
            title=title,
            url=text_field(url) or source.homepage,
            description=truncate(strip_markup(description)),
            source_name=source.name,
            source_id=source.id,
            source_icon=source.icon,
            source_color=source.color,
            timestamp=to_epoch_ms(timestamp, fetched_at),
            hot=to_hot(hot),
        )
