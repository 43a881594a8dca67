"""Writing-streak and word-count statistics.

Only the set of distinct calendar days with at least one entry matters
for streaks; how many entries a day holds does not.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from pydantic import BaseModel

from pagebound.entries.models import JournalEntry

_ONE_DAY = timedelta(days=1)


def round_half_up(value: float) -> int:
    """Round to the nearest int, halves away from zero for positive values."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def days(self) -> list[date]:
        """Every day in the range, oldest first."""
        count = (self.end - self.start).days + 1
        return [self.start + timedelta(days=i) for i in range(max(0, count))]

    @classmethod
    def last_days(cls, n: int, today: date) -> DateRange:
        """The ``n`` days ending today, today included."""
        return cls(today - timedelta(days=n - 1), today)

    @classmethod
    def this_week(cls, today: date) -> DateRange:
        """Sunday through Saturday of the week containing ``today``."""
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        return cls(start, start + timedelta(days=6))

    @classmethod
    def this_month(cls, today: date) -> DateRange:
        start = today.replace(day=1)
        next_month = (start + timedelta(days=32)).replace(day=1)
        return cls(start, next_month - _ONE_DAY)

    @classmethod
    def all_time(cls, entries: Iterable[JournalEntry], today: date) -> DateRange:
        """From the earliest entry (or today) through today."""
        days = [e.date for e in entries]
        return cls(min(days, default=today), max([today, *days]))


class WritingStats(BaseModel):
    """Summary of writing activity over a range."""

    total_words: int = 0
    total_entries: int = 0
    average_words_per_entry: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    entries_this_month: int = 0


def entry_days(entries: Iterable[JournalEntry]) -> set[date]:
    """Distinct calendar days that have at least one entry."""
    return {e.date for e in entries}


class StreakAnalyzer:
    """Streak and word statistics; every method reads only its arguments."""

    def __init__(self, *, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or datetime.now

    def today(self) -> date:
        return self._now().date()

    def current_streak(self, entries: Iterable[JournalEntry]) -> int:
        """Consecutive days ending today, or yesterday if today is still blank."""
        days = entry_days(entries)
        check = self.today()
        if check not in days:
            check -= _ONE_DAY
        streak = 0
        while check in days:
            streak += 1
            check -= _ONE_DAY
        return streak

    def longest_streak(self, entries: Iterable[JournalEntry]) -> int:
        longest = 0
        run = 0
        previous: date | None = None
        for day in sorted(entry_days(entries)):
            if previous is not None and day - previous == _ONE_DAY:
                run += 1
            else:
                run = 1
            longest = max(longest, run)
            previous = day
        return longest

    def total_words(self, entries: Iterable[JournalEntry], date_range: DateRange) -> int:
        return sum(e.word_count for e in entries if e.date in date_range)

    def average_words_per_entry(
        self, entries: Iterable[JournalEntry], date_range: DateRange
    ) -> int:
        """Rounded mean word count, 0 when the range holds no entries."""
        in_range = [e for e in entries if e.date in date_range]
        if not in_range:
            return 0
        return round_half_up(sum(e.word_count for e in in_range) / len(in_range))

    def daily_word_series(
        self, entries: Iterable[JournalEntry], date_range: DateRange
    ) -> list[tuple[date, int]]:
        """Word totals for every day in the range, zero-filled."""
        totals: dict[date, int] = {}
        for entry in entries:
            if entry.date in date_range:
                totals[entry.date] = totals.get(entry.date, 0) + entry.word_count
        return [(day, totals.get(day, 0)) for day in date_range.days()]

    def entries_this_month(self, entries: Iterable[JournalEntry]) -> int:
        month = DateRange.this_month(self.today())
        return sum(1 for e in entries if e.date in month)

    def writing_stats(
        self, entries: Iterable[JournalEntry], date_range: DateRange
    ) -> WritingStats:
        entries = list(entries)
        in_range = [e for e in entries if e.date in date_range]
        return WritingStats(
            total_words=self.total_words(in_range, date_range),
            total_entries=len(in_range),
            average_words_per_entry=self.average_words_per_entry(in_range, date_range),
            current_streak=self.current_streak(entries),
            longest_streak=self.longest_streak(entries),
            entries_this_month=self.entries_this_month(entries),
        )
