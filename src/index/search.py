"""Case-insensitive substring search over entry plain text."""

from __future__ import annotations

import re

from pagebound.entries.models import JournalEntry
from pagebound.entries.store import most_recent_first
from pagebound.entries.text import extract_plain_text
from pagebound.index.tags import EntrySource

SNIPPET_LENGTH = 150
ELLIPSIS = "..."

# Share of the window shown before the match; the rest follows it.
_LEAD_FRACTION = 1 / 3


def _pattern(query: str) -> re.Pattern[str]:
    return re.compile(re.escape(query), re.IGNORECASE)


def highlight_spans(text: str, query: str) -> list[tuple[int, int]]:
    """Offsets of every case-insensitive occurrence of ``query`` in ``text``."""
    if not query.strip() or not text:
        return []
    return [m.span() for m in _pattern(query).finditer(text)]


def highlight(text: str, query: str, *, start: str = "<mark>", end: str = "</mark>") -> str:
    """Wrap each occurrence of ``query`` in ``start``/``end`` markers.

    The query is matched literally, so ``c++`` or ``(`` are safe.
    """
    spans = highlight_spans(text, query)
    if not spans:
        return text
    parts: list[str] = []
    last = 0
    for lo, hi in spans:
        parts.append(text[last:lo])
        parts.append(f"{start}{text[lo:hi]}{end}")
        last = hi
    parts.append(text[last:])
    return "".join(parts)


def snippet(entry: JournalEntry | str, query: str, *, length: int = SNIPPET_LENGTH) -> str:
    """Preview window of about ``length`` characters around the first match.

    Without a match the first ``length`` characters are returned.
    Truncated edges are marked with an ellipsis.
    """
    text = extract_plain_text(entry.content if isinstance(entry, JournalEntry) else entry)
    index = text.lower().find(query.lower()) if query.strip() else -1

    if index == -1:
        if len(text) <= length:
            return text
        return text[:length] + ELLIPSIS

    lead = int(length * _LEAD_FRACTION)
    lo = max(0, index - lead)
    hi = min(len(text), index + len(query) + (length - lead))
    preview = text[lo:hi]
    if lo > 0:
        preview = ELLIPSIS + preview
    if hi < len(text):
        preview = preview + ELLIPSIS
    return preview


class SearchIndex:
    """Substring search derived from the entries of a source on every call."""

    def __init__(self, source: EntrySource, *, snippet_length: int = SNIPPET_LENGTH) -> None:
        self._source = source
        self._snippet_length = snippet_length

    def search(self, query: str) -> list[JournalEntry]:
        """Entries whose plain text contains ``query``, most recent first.

        A blank query matches nothing.
        """
        if not query.strip():
            return []
        needle = query.lower()
        return most_recent_first(
            e for e in self._source.all_entries() if needle in e.plain_text.lower()
        )

    def snippet(self, entry: JournalEntry, query: str) -> str:
        return snippet(entry, query, length=self._snippet_length)

    def highlight(self, text: str, query: str) -> str:
        return highlight(text, query)
