"""Derived indexes over journal entries: tags and text search."""

from pagebound.index.search import SearchIndex, highlight, highlight_spans, snippet
from pagebound.index.tags import (
    STARTER_TAGS,
    TAG_PALETTE,
    EntrySource,
    TagIndex,
    TagRecord,
    color_for,
)

__all__ = [
    "STARTER_TAGS",
    "TAG_PALETTE",
    "EntrySource",
    "SearchIndex",
    "TagIndex",
    "TagRecord",
    "color_for",
    "highlight",
    "highlight_spans",
    "snippet",
]
