"""Entry lifecycle, per-day grouping, and selection.

EntryStore owns the rules for how entries change (locking, past-day
read-only, bookmarks, appended updates) and which entry is selected for
each visible day.  Records themselves live in an ``EntryRepository``;
the store reads the repository's latest snapshot on every call and keeps
no copy of its own, so results always reflect the newest writes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Protocol

from pagebound.entries.models import (
    EntryUpdate,
    ImageAttachment,
    JournalEntry,
    Mood,
    normalize_tags,
)

logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence collaborator for journal entries."""

    def snapshot(self) -> dict[str, JournalEntry]: ...

    def save(self, entry: JournalEntry) -> None: ...

    def delete(self, entry_id: str) -> None: ...


class InMemoryEntryRepository:
    """Dict-backed repository for library use and tests."""

    def __init__(self, entries: Iterable[JournalEntry] = ()) -> None:
        self._entries: dict[str, JournalEntry] = {e.id: e for e in entries}

    def snapshot(self) -> dict[str, JournalEntry]:
        return dict(self._entries)

    def save(self, entry: JournalEntry) -> None:
        self._entries[entry.id] = entry

    def delete(self, entry_id: str) -> None:
        self._entries.pop(entry_id, None)


def most_recent_first(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Order entries newest day first, newest creation first within a day."""
    return sorted(entries, key=lambda e: (e.date, e.created_at), reverse=True)


class EntryStore:
    """Entry lifecycle and per-day selection over a repository snapshot.

    Mutations return the saved entry, or ``None`` when the id is unknown
    or the change is not allowed.  Rejections are not errors: a stale id
    from an optimistic UI or an edit to a past day just does nothing.
    """

    def __init__(
        self,
        repository: EntryRepository | None = None,
        *,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository: EntryRepository = repository or InMemoryEntryRepository()
        self._now = now or datetime.now
        self._selected: dict[date, str] = {}

    # ── Clock ────────────────────────────────────────────────────

    def today(self) -> date:
        return self._now().date()

    def is_past_day(self, day: date) -> bool:
        """True when ``day`` is strictly before today."""
        return day < self.today()

    # ── Reads ────────────────────────────────────────────────────

    def all_entries(self) -> list[JournalEntry]:
        return list(self._repository.snapshot().values())

    def get_entry(self, entry_id: str) -> JournalEntry | None:
        return self._repository.snapshot().get(entry_id)

    def day_entries(self, day: date) -> list[JournalEntry]:
        """Entries dated ``day``, oldest creation first."""
        entries = [e for e in self._repository.snapshot().values() if e.date == day]
        entries.sort(key=lambda e: (e.created_at, e.id))
        return entries

    def bookmarked_entries(self) -> list[JournalEntry]:
        return most_recent_first(e for e in self.all_entries() if e.is_bookmarked)

    def is_editable(self, entry: JournalEntry) -> bool:
        """Content, mood, tags, and images may change only on unlocked entries of today or later."""
        return not entry.is_locked and not self.is_past_day(entry.date)

    # ── Selection ────────────────────────────────────────────────

    def select_entry(self, day: date, entry_id: str) -> JournalEntry | None:
        """Select an entry for ``day``; ids from another day are ignored."""
        for entry in self.day_entries(day):
            if entry.id == entry_id:
                self._selected[day] = entry_id
                return entry
        logger.debug("Entry %s is not on %s, selection unchanged", entry_id, day)
        return self.selected_entry(day)

    def selected_entry(self, day: date) -> JournalEntry | None:
        """Currently selected entry for ``day``.

        Re-derived from the latest snapshot on every call.  If the stored
        selection no longer belongs to the day, the newest remaining entry
        is selected instead, or ``None`` when the day is empty.
        """
        entries = self.day_entries(day)
        if not entries:
            self._selected.pop(day, None)
            return None
        selected_id = self._selected.get(day)
        for entry in entries:
            if entry.id == selected_id:
                return entry
        fallback = entries[-1]
        self._selected[day] = fallback.id
        return fallback

    # ── Write operations ─────────────────────────────────────────

    def create_entry(
        self,
        day: date,
        content: str,
        mood: Mood | None = None,
        tags: Iterable[str] = (),
    ) -> JournalEntry:
        """Create an entry on ``day`` and make it the day's selection."""
        now = self._now()
        entry = JournalEntry(
            date=day,
            content=content,
            mood=mood,
            tags=list(tags),
            created_at=now,
            updated_at=now,
        )
        entry.recount()
        self._repository.save(entry)
        self._selected[day] = entry.id
        logger.debug("Created entry %s on %s", entry.id, day)
        return entry

    def update_entry(
        self,
        entry_id: str,
        content: str,
        mood: Mood | None,
        tags: Iterable[str],
    ) -> JournalEntry | None:
        """Replace content, mood, and tags of an editable entry."""
        entry = self._editable(entry_id, "update")
        if entry is None:
            return None
        entry.content = content
        entry.mood = mood
        entry.tags = normalize_tags(list(tags))
        entry.recount()
        return self._touch(entry)

    def update_entry_tags(self, entry_id: str, tags: Iterable[str]) -> JournalEntry | None:
        entry = self._editable(entry_id, "retag")
        if entry is None:
            return None
        entry.tags = normalize_tags(list(tags))
        return self._touch(entry)

    def attach_image(self, entry_id: str, image: ImageAttachment) -> JournalEntry | None:
        entry = self._editable(entry_id, "attach image to")
        if entry is None:
            return None
        entry.images.append(image)
        return self._touch(entry)

    def remove_image(self, entry_id: str, image_id: str) -> JournalEntry | None:
        entry = self._editable(entry_id, "remove image from")
        if entry is None:
            return None
        entry.images = [img for img in entry.images if img.id != image_id]
        return self._touch(entry)

    def lock_entry(self, entry_id: str) -> JournalEntry | None:
        """Lock an entry.  Locking is one-way."""
        entry = self._copy(entry_id)
        if entry is None:
            return None
        if entry.is_locked:
            return entry
        entry.is_locked = True
        logger.info("Locked entry %s", entry_id)
        return self._touch(entry)

    def add_entry_update(self, entry_id: str, text: str) -> JournalEntry | None:
        """Append a timestamped note.  Allowed on locked and past entries."""
        entry = self._copy(entry_id)
        if entry is None:
            return None
        entry.updates.append(EntryUpdate(content=text, created_at=self._now()))
        return self._touch(entry)

    def toggle_bookmark(self, entry_id: str) -> JournalEntry | None:
        entry = self._copy(entry_id)
        if entry is None:
            return None
        entry.is_bookmarked = not entry.is_bookmarked
        return self._touch(entry)

    def delete_entry(self, entry_id: str) -> JournalEntry | None:
        """Hard-delete an entry, moving the day's selection if needed."""
        entry = self.get_entry(entry_id)
        if entry is None:
            logger.debug("Delete ignored, unknown entry %s", entry_id)
            return None
        self._repository.delete(entry_id)
        if self._selected.get(entry.date) == entry_id:
            remaining = [e for e in self.day_entries(entry.date) if e.id != entry_id]
            if remaining:
                self._selected[entry.date] = remaining[-1].id
            else:
                self._selected.pop(entry.date, None)
        logger.info("Deleted entry %s", entry_id)
        return entry

    # ── Private helpers ──────────────────────────────────────────

    def _copy(self, entry_id: str) -> JournalEntry | None:
        entry = self.get_entry(entry_id)
        if entry is None:
            logger.debug("Unknown entry %s", entry_id)
            return None
        return entry.model_copy(deep=True)

    def _editable(self, entry_id: str, action: str) -> JournalEntry | None:
        entry = self._copy(entry_id)
        if entry is None:
            return None
        if not self.is_editable(entry):
            reason = "entry is locked" if entry.is_locked else f"{entry.date} is a past day"
            logger.info("Cannot %s entry %s: %s", action, entry_id, reason)
            return None
        return entry

    def _touch(self, entry: JournalEntry) -> JournalEntry:
        entry.updated_at = self._now()
        self._repository.save(entry)
        return entry
