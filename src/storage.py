"""JSON-backed journal store.

Persists entries, program responses, and program progress in a single
JSON file, loaded on init and saved after every write.  Implements both
``EntryRepository`` and ``ProgramRepository`` so the CLI can share one
file between the entry store and the program tracker.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pagebound.entries.models import JournalEntry
from pagebound.programs.models import ProgramEntry, ProgramProgress
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

STORE_FILENAME = ".pagebound-store.json"


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    entries: list[JournalEntry] = Field(default_factory=list)
    program_entries: list[ProgramEntry] = Field(default_factory=list)
    progress: list[ProgramProgress] = Field(default_factory=list)


class JournalFileStore:
    """JSON file repository for journal entries and guided-program state."""

    def __init__(self, directory: Path) -> None:
        self._path = Path(directory) / STORE_FILENAME
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError):
            logger.warning("Corrupt journal store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            self._data.model_dump_json(indent=2),
            encoding="utf-8",
        )

    # ── Entries ──────────────────────────────────────────────────

    def snapshot(self) -> dict[str, JournalEntry]:
        return {e.id: e.model_copy(deep=True) for e in self._data.entries}

    def save(self, entry: JournalEntry) -> None:
        """Insert or replace an entry by id."""
        self._data.entries = [e for e in self._data.entries if e.id != entry.id]
        self._data.entries.append(entry)
        self._save()

    def delete(self, entry_id: str) -> None:
        remaining = [e for e in self._data.entries if e.id != entry_id]
        if len(remaining) == len(self._data.entries):
            return
        self._data.entries = remaining
        self._save()

    # ── Program state ────────────────────────────────────────────

    def program_entries(self) -> dict[tuple[str, str, int], ProgramEntry]:
        return {e.key: e.model_copy() for e in self._data.program_entries}

    def save_program_entry(self, entry: ProgramEntry) -> None:
        self._data.program_entries = [
            e for e in self._data.program_entries if e.key != entry.key
        ]
        self._data.program_entries.append(entry)
        self._save()

    def progress_records(self) -> dict[tuple[str, str], ProgramProgress]:
        return {p.key: p.model_copy() for p in self._data.progress}

    def save_progress(self, progress: ProgramProgress) -> None:
        self._data.progress = [p for p in self._data.progress if p.key != progress.key]
        self._data.progress.append(progress)
        self._save()
