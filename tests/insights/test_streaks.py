"""Tests for StreakAnalyzer, DateRange, and milestones."""

from datetime import date, datetime

from pagebound.entries.models import JournalEntry
from pagebound.insights.milestones import (
    MILESTONES,
    current_milestone,
    next_milestone,
    progress_to_next,
)
from pagebound.insights.streaks import DateRange, StreakAnalyzer, WritingStats, round_half_up


def _entry(day: date, words: int = 0) -> JournalEntry:
    return JournalEntry(date=day, word_count=words, created_at=datetime.combine(day, datetime.min.time()))


def _jan(*days: int, words: int = 0) -> list[JournalEntry]:
    return [_entry(date(2024, 1, d), words) for d in days]


def _analyzer(today: date) -> StreakAnalyzer:
    return StreakAnalyzer(now=lambda: datetime.combine(today, datetime.min.time()).replace(hour=12))


class TestCurrentStreak:
    def test_five_day_run_ending_today(self):
        entries = _jan(1, 2, 3, 4, 5)
        analyzer = _analyzer(date(2024, 1, 5))
        assert analyzer.current_streak(entries) == 5
        assert analyzer.longest_streak(entries) == 5

    def test_adding_a_later_day(self):
        entries = _jan(1, 2, 3, 4, 5, 10)
        analyzer = _analyzer(date(2024, 1, 10))
        assert analyzer.current_streak(entries) == 1
        assert analyzer.longest_streak(entries) == 5

    def test_anchors_on_yesterday_when_today_blank(self):
        assert _analyzer(date(2024, 1, 6)).current_streak(_jan(1, 2, 3, 4, 5)) == 5

    def test_zero_when_neither_today_nor_yesterday(self):
        assert _analyzer(date(2024, 1, 7)).current_streak(_jan(1, 2, 3, 4, 5)) == 0

    def test_multiple_entries_per_day_count_once(self):
        entries = _jan(4, 4, 5, 5, 5)
        assert _analyzer(date(2024, 1, 5)).current_streak(entries) == 2

    def test_empty(self):
        analyzer = _analyzer(date(2024, 1, 5))
        assert analyzer.current_streak([]) == 0
        assert analyzer.longest_streak([]) == 0


class TestLongestStreak:
    def test_gap_breaks_run(self):
        entries = _jan(1, 2, 4, 5, 6, 8)
        assert _analyzer(date(2024, 1, 8)).longest_streak(entries) == 3

    def test_runs_across_month_boundary(self):
        entries = [_entry(date(2023, 12, 30)), _entry(date(2023, 12, 31)), _entry(date(2024, 1, 1))]
        assert _analyzer(date(2024, 3, 1)).longest_streak(entries) == 3

    def test_order_independent(self):
        entries = _jan(3, 1, 2)
        assert _analyzer(date(2024, 1, 3)).longest_streak(entries) == 3


class TestWordStats:
    def test_total_and_average_in_range(self):
        entries = _jan(1, words=10) + _jan(2, words=20) + _jan(20, words=1000)
        analyzer = _analyzer(date(2024, 1, 5))
        week = DateRange(date(2024, 1, 1), date(2024, 1, 7))

        assert analyzer.total_words(entries, week) == 30
        assert analyzer.average_words_per_entry(entries, week) == 15

    def test_average_rounds_half_up(self):
        entries = _jan(1, words=1) + _jan(2, words=2)
        rng = DateRange(date(2024, 1, 1), date(2024, 1, 2))
        assert _analyzer(date(2024, 1, 2)).average_words_per_entry(entries, rng) == 2

    def test_average_empty_is_zero(self):
        rng = DateRange(date(2024, 1, 1), date(2024, 1, 2))
        assert _analyzer(date(2024, 1, 2)).average_words_per_entry([], rng) == 0

    def test_daily_series_zero_filled(self):
        entries = _jan(1, words=5) + _jan(1, words=7) + _jan(3, words=2)
        rng = DateRange(date(2024, 1, 1), date(2024, 1, 4))

        assert _analyzer(date(2024, 1, 4)).daily_word_series(entries, rng) == [
            (date(2024, 1, 1), 12),
            (date(2024, 1, 2), 0),
            (date(2024, 1, 3), 2),
            (date(2024, 1, 4), 0),
        ]

    def test_entries_this_month(self):
        entries = [_entry(date(2023, 12, 31))] + _jan(1, 15)
        assert _analyzer(date(2024, 1, 20)).entries_this_month(entries) == 2

    def test_writing_stats(self):
        entries = _jan(1, 2, 3, words=10) + [_entry(date(2023, 12, 1), 99)]
        analyzer = _analyzer(date(2024, 1, 3))

        stats = analyzer.writing_stats(entries, DateRange.last_days(7, analyzer.today()))

        assert stats == WritingStats(
            total_words=30,
            total_entries=3,
            average_words_per_entry=10,
            current_streak=3,
            longest_streak=3,
            entries_this_month=3,
        )


class TestDateRange:
    def test_contains_is_inclusive(self):
        rng = DateRange(date(2024, 1, 1), date(2024, 1, 3))
        assert date(2024, 1, 1) in rng
        assert date(2024, 1, 3) in rng
        assert date(2024, 1, 4) not in rng
        assert "2024-01-02" not in rng

    def test_last_days(self):
        assert DateRange.last_days(7, date(2024, 1, 5)) == DateRange(date(2023, 12, 30), date(2024, 1, 5))

    def test_this_week_starts_sunday(self):
        rng = DateRange.this_week(date(2024, 1, 3))
        assert rng == DateRange(date(2023, 12, 31), date(2024, 1, 6))

    def test_this_week_on_sunday(self):
        assert DateRange.this_week(date(2024, 1, 7)).start == date(2024, 1, 7)

    def test_this_month_leap_february(self):
        assert DateRange.this_month(date(2024, 2, 10)) == DateRange(date(2024, 2, 1), date(2024, 2, 29))

    def test_this_month_december(self):
        assert DateRange.this_month(date(2023, 12, 5)).end == date(2023, 12, 31)

    def test_all_time(self):
        entries = _jan(3, 1)
        assert DateRange.all_time(entries, date(2024, 1, 5)) == DateRange(date(2024, 1, 1), date(2024, 1, 5))
        assert DateRange.all_time([], date(2024, 1, 5)).days() == [date(2024, 1, 5)]


class TestRoundHalfUp:
    def test_halves_go_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(66.666) == 67
        assert round_half_up(0.49) == 0


class TestMilestones:
    def test_before_first(self):
        assert current_milestone(0) is None
        assert next_milestone(0).days == 3
        assert progress_to_next(0) == 0

    def test_between(self):
        assert current_milestone(5).title == "Seedling"
        assert next_milestone(5).days == 7
        assert progress_to_next(5) == 50

    def test_exactly_on_milestone(self):
        assert current_milestone(7).days == 7
        assert next_milestone(7).days == 14
        assert progress_to_next(7) == 0

    def test_past_last(self):
        assert current_milestone(400) is MILESTONES[-1]
        assert next_milestone(400) is None
        assert progress_to_next(400) == 100

    def test_ascending(self):
        days = [m.days for m in MILESTONES]
        assert days == sorted(days)
