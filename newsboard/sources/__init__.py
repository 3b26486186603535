"""Source catalog and per-shape adapters."""

from .base import (
    CATEGORIES,
    AdapterKind,
    Category,
    NewsItem,
    SourceAdapter,
    SourceDescriptor,
)
from .registry import DEFAULT_SOURCES, SourceRegistry, build_adapters

__all__ = [
    "CATEGORIES",
    "AdapterKind",
    "Category",
    "NewsItem",
    "SourceAdapter",
    "SourceDescriptor",
    "DEFAULT_SOURCES",
    "SourceRegistry",
    "build_adapters",
]
