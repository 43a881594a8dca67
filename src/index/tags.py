"""Tag vocabulary, per-tag lookups, and deterministic tag colors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pagebound.entries.models import JournalEntry, normalize_tag
from pagebound.entries.store import most_recent_first
from pagebound.errors import TagDeletionNotSupportedError

# Always-suggested tags with their fixed colors.
STARTER_TAGS: dict[str, str] = {
    "personal": "#8b5cf6",
    "work": "#3b82f6",
    "health": "#22c55e",
    "relationships": "#ec4899",
    "gratitude": "#f59e0b",
    "goals": "#06b6d4",
    "reflection": "#6366f1",
    "ideas": "#eab308",
    "family": "#f97316",
    "growth": "#14b8a6",
}

TAG_PALETTE: tuple[str, ...] = (
    "#8b5cf6",
    "#3b82f6",
    "#22c55e",
    "#ec4899",
    "#f59e0b",
    "#06b6d4",
    "#6366f1",
    "#eab308",
    "#f97316",
    "#14b8a6",
    "#ef4444",
    "#84cc16",
)


class EntrySource(Protocol):
    def all_entries(self) -> list[JournalEntry]: ...


@dataclass(frozen=True)
class TagRecord:
    """A tag with its display color and number of entries using it."""

    name: str
    color: str
    count: int


def _string_hash(text: str) -> int:
    """32-bit ``h * 31 + c`` string hash, stable across processes."""
    h = 0
    for ch in text:
        h = (ord(ch) + ((h << 5) - h)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def color_for(tag: str) -> str:
    """Deterministic palette color for a tag."""
    name = normalize_tag(tag)
    starter = STARTER_TAGS.get(name)
    if starter is not None:
        return starter
    return TAG_PALETTE[abs(_string_hash(name)) % len(TAG_PALETTE)]


class TagIndex:
    """Tag lookups derived from the entries of a source on every call."""

    def __init__(self, source: EntrySource) -> None:
        self._source = source

    def used_tags(self) -> set[str]:
        return {tag for entry in self._source.all_entries() for tag in entry.tags}

    def all_tags(self) -> list[str]:
        """Sorted union of used tags and the starter vocabulary."""
        return sorted(self.used_tags() | set(STARTER_TAGS))

    def get_entries_by_tag(self, tag: str) -> list[JournalEntry]:
        """Entries carrying ``tag``, most recent first."""
        name = normalize_tag(tag)
        if not name:
            return []
        return most_recent_first(e for e in self._source.all_entries() if name in e.tags)

    def tag_count(self, tag: str) -> int:
        name = normalize_tag(tag)
        return sum(1 for e in self._source.all_entries() if name in e.tags)

    def tag_records(self) -> list[TagRecord]:
        counts: dict[str, int] = {}
        for entry in self._source.all_entries():
            for tag in entry.tags:
                counts[tag] = counts.get(tag, 0) + 1
        return [TagRecord(name, color_for(name), counts.get(name, 0)) for name in self.all_tags()]

    def color_for(self, tag: str) -> str:
        return color_for(tag)

    def delete_tag(self, tag: str) -> None:
        """Not implemented: whether to strip the tag from every entry is undecided."""
        raise TagDeletionNotSupportedError(normalize_tag(tag))
