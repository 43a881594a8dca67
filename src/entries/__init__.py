"""Entry domain — journal entry models, lifecycle store, and autosave."""

from pagebound.entries.autosave import KEEP, AutosaveDebouncer, Draft
from pagebound.entries.models import (
    EntryUpdate,
    ImageAttachment,
    JournalEntry,
    Mood,
    normalize_tag,
    normalize_tags,
)
from pagebound.entries.store import (
    EntryRepository,
    EntryStore,
    InMemoryEntryRepository,
    most_recent_first,
)
from pagebound.entries.text import count_words, extract_plain_text

__all__ = [
    "KEEP",
    "AutosaveDebouncer",
    "Draft",
    "EntryRepository",
    "EntryStore",
    "EntryUpdate",
    "ImageAttachment",
    "InMemoryEntryRepository",
    "JournalEntry",
    "Mood",
    "count_words",
    "extract_plain_text",
    "most_recent_first",
    "normalize_tag",
    "normalize_tags",
]
