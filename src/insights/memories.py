"""On-this-day recall: entries from the same calendar date in earlier years."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from pagebound.entries.models import JournalEntry


@dataclass
class MemoryGroup:
    """Entries written exactly ``years_ago`` years before the target day."""

    years_ago: int
    entries: list[JournalEntry] = field(default_factory=list)


def _years_between(earlier: date, later: date) -> int:
    years = later.year - earlier.year
    if (later.month, later.day) < (earlier.month, earlier.day):
        years -= 1
    return years


def on_this_day(entries: Iterable[JournalEntry], day: date) -> list[JournalEntry]:
    """Entries sharing ``day``'s month and day from earlier years, newest first."""
    matches = [
        e
        for e in entries
        if e.date.month == day.month and e.date.day == day.day and e.date.year < day.year
    ]
    matches.sort(key=lambda e: (e.date, e.created_at), reverse=True)
    return matches


def group_by_years_ago(entries: Iterable[JournalEntry], day: date) -> list[MemoryGroup]:
    """Group on-this-day entries by how many years ago they were written."""
    groups: dict[int, MemoryGroup] = {}
    for entry in on_this_day(entries, day):
        years = _years_between(entry.date, day)
        groups.setdefault(years, MemoryGroup(years)).entries.append(entry)
    return [groups[k] for k in sorted(groups)]
