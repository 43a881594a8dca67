"""Idle-debounced persistence of in-progress entry edits.

Every keystroke-level change is handed to ``AutosaveDebouncer.schedule``;
only the latest draft per entry is written, once the entry has been idle
for ``delay`` seconds.  ``close`` cancels pending timers without writing,
so nothing reaches the store after teardown.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from pagebound.entries.models import JournalEntry, Mood
from pagebound.entries.store import EntryStore

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 1.2


class _Keep(Enum):
    STORED = "stored"


#: Leaves a field as the store (or an earlier draft) has it.
KEEP = _Keep.STORED


@dataclass
class Draft:
    """Latest unsaved state of an entry."""

    entry_id: str
    content: str
    mood: Mood | None | _Keep = KEEP
    tags: list[str] | _Keep = KEEP


class AutosaveDebouncer:
    """Coalesce entry edits and persist them after an idle window."""

    def __init__(self, store: EntryStore, *, delay: float = DEFAULT_DELAY) -> None:
        self._store = store
        self._delay = delay
        self._drafts: dict[str, Draft] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._closed = False

    @property
    def pending(self) -> list[str]:
        """Ids of entries with an unsaved draft."""
        return list(self._drafts)

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(
        self,
        entry_id: str,
        content: str,
        mood: Mood | None | _Keep = KEEP,
        tags: Iterable[str] | _Keep = KEEP,
    ) -> None:
        """Record a draft and restart the entry's idle timer.

        ``mood`` and ``tags`` left as ``KEEP`` carry over from the previous
        draft, or from the stored entry when it is written.  Pass ``None``
        to clear the mood.  Must be called from a running event loop.
        """
        if self._closed:
            raise RuntimeError("autosave debouncer is closed")
        loop = asyncio.get_running_loop()
        previous = self._drafts.get(entry_id)
        if previous is not None:
            if mood is KEEP:
                mood = previous.mood
            if tags is KEEP:
                tags = previous.tags
        self._drafts[entry_id] = Draft(entry_id, content, mood, tags if tags is KEEP else list(tags))
        timer = self._timers.pop(entry_id, None)
        if timer is not None:
            timer.cancel()
        self._timers[entry_id] = loop.call_later(self._delay, self._fire, entry_id)

    def flush(self) -> list[JournalEntry]:
        """Write every pending draft now and clear the timers."""
        saved: list[JournalEntry] = []
        for entry_id in list(self._drafts):
            result = self._write(entry_id)
            if result is not None:
                saved.append(result)
        return saved

    def close(self) -> None:
        """Cancel pending timers and drop unsaved drafts."""
        for timer in self._timers.values():
            timer.cancel()
        if self._drafts:
            logger.debug("Discarding %d unsaved draft(s) on close", len(self._drafts))
        self._timers.clear()
        self._drafts.clear()
        self._closed = True

    async def __aenter__(self) -> AutosaveDebouncer:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def _fire(self, entry_id: str) -> None:
        if self._closed:
            return
        self._write(entry_id)

    def _write(self, entry_id: str) -> JournalEntry | None:
        timer = self._timers.pop(entry_id, None)
        if timer is not None:
            timer.cancel()
        draft = self._drafts.pop(entry_id, None)
        if draft is None:
            return None
        stored = self._store.get_entry(entry_id)
        if stored is None:
            logger.info("Autosave for entry %s dropped: entry no longer exists", entry_id)
            return None
        mood = stored.mood if draft.mood is KEEP else draft.mood
        tags = stored.tags if draft.tags is KEEP else draft.tags
        result = self._store.update_entry(draft.entry_id, draft.content, mood, tags)
        if result is None:
            logger.info("Autosave for entry %s was not applied", entry_id)
        else:
            logger.debug("Autosaved entry %s (%d words)", entry_id, result.word_count)
        return result
