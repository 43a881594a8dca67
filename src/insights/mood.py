"""Mood-energy aggregates and qualitative mood insights.

Each mood maps to a coarse energy bucket.  Entries are bucketed by the
weekday of their calendar day and by the hour-of-day window of their
creation time, then qualitative findings are drawn from those buckets.
Every finding has a minimum sample size so sparse data never produces
a conclusion.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import TypeVar, assert_never

from pagebound.entries.models import JournalEntry, Mood
from pagebound.insights.streaks import round_half_up

K = TypeVar("K")


class Energy(StrEnum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class TimeOfDay(StrEnum):
    MORNING = "morning"  # 6-12
    AFTERNOON = "afternoon"  # 12-18
    EVENING = "evening"  # 18-24
    NIGHT = "night"  # 0-6


class InsightKind(StrEnum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    ACTIONABLE = "actionable"


# Sunday-first, matching the bucket keys of aggregate_by_day_of_week.
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

TIME_LABELS: dict[TimeOfDay, str] = {
    TimeOfDay.MORNING: "Morning (6-12)",
    TimeOfDay.AFTERNOON: "Afternoon (12-18)",
    TimeOfDay.EVENING: "Evening (18-24)",
    TimeOfDay.NIGHT: "Night (0-6)",
}


def energy_of(mood: Mood) -> Energy:
    """Energy bucket of a mood.  Total over ``Mood``."""
    match mood:
        case (
            Mood.HAPPY
            | Mood.EXCITED
            | Mood.GRATEFUL
            | Mood.CALM
            | Mood.CREATIVE
            | Mood.ENERGETIC
            | Mood.HOPEFUL
            | Mood.PROUD
            | Mood.LOVED
            | Mood.CONTENT
        ):
            return Energy.POSITIVE
        case Mood.THOUGHTFUL | Mood.CONFUSED:
            return Energy.NEUTRAL
        case (
            Mood.TIRED
            | Mood.NUMB
            | Mood.LONELY
            | Mood.ANXIOUS
            | Mood.SAD
            | Mood.ANGRY
            | Mood.FRUSTRATED
            | Mood.DEFEATED
            | Mood.STRESSED
        ):
            return Energy.NEGATIVE
        case _:
            assert_never(mood)


def time_of_day(moment: datetime) -> TimeOfDay:
    hour = moment.hour
    if 6 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 18:
        return TimeOfDay.AFTERNOON
    if hour >= 18:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def day_of_week(day: date) -> int:
    """0 = Sunday … 6 = Saturday."""
    return (day.weekday() + 1) % 7


@dataclass
class EnergyBucket:
    """Energy counts for one weekday or time-of-day window."""

    positive: int = 0
    neutral: int = 0
    negative: int = 0
    total: int = 0

    def add(self, energy: Energy) -> None:
        match energy:
            case Energy.POSITIVE:
                self.positive += 1
            case Energy.NEUTRAL:
                self.neutral += 1
            case Energy.NEGATIVE:
                self.negative += 1
            case _:
                assert_never(energy)
        self.total += 1

    def rate(self, energy: Energy) -> float:
        """Share of samples in ``energy``; 0.0 for an empty bucket."""
        if self.total == 0:
            return 0.0
        return getattr(self, energy.value) / self.total


@dataclass
class MoodInsight:
    """A qualitative finding about mood patterns."""

    kind: InsightKind
    title: str
    description: str


@dataclass
class MoodSummary:
    """Aggregates behind the insights, for rendering."""

    counts: dict[Mood, int] = field(default_factory=dict)
    by_day: dict[int, EnergyBucket] = field(default_factory=dict)
    by_time: dict[TimeOfDay, EnergyBucket] = field(default_factory=dict)
    positivity_rate: int = 0
    total_entries: int = 0


class MoodAnalyzer:
    """Mood statistics over a collection of entries.

    Entries without a mood are ignored everywhere.
    """

    def __init__(
        self,
        *,
        min_bucket_samples: int = 2,
        min_mood_samples: int = 7,
        consistency_samples: int = 14,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.min_bucket_samples = min_bucket_samples
        self.min_mood_samples = min_mood_samples
        self.consistency_samples = consistency_samples
        self._now = now or datetime.now

    @staticmethod
    def energy_of(mood: Mood) -> Energy:
        return energy_of(mood)

    def recent_mood_entries(
        self, entries: Iterable[JournalEntry], days: int = 30
    ) -> list[JournalEntry]:
        """Mood-tagged entries dated within the last ``days`` days."""
        today = self._now().date()
        start = today - timedelta(days=days)
        return [e for e in entries if e.mood is not None and start <= e.date <= today]

    def mood_counts(self, entries: Iterable[JournalEntry]) -> dict[Mood, int]:
        """Count per mood, in ``Mood`` declaration order."""
        counts = {mood: 0 for mood in Mood}
        for entry in entries:
            if entry.mood is not None:
                counts[entry.mood] += 1
        return {mood: n for mood, n in counts.items() if n}

    def aggregate_by_day_of_week(self, entries: Iterable[JournalEntry]) -> dict[int, EnergyBucket]:
        buckets = {i: EnergyBucket() for i in range(7)}
        for entry in entries:
            if entry.mood is not None:
                buckets[day_of_week(entry.date)].add(energy_of(entry.mood))
        return buckets

    def aggregate_by_time_of_day(
        self, entries: Iterable[JournalEntry]
    ) -> dict[TimeOfDay, EnergyBucket]:
        buckets = {slot: EnergyBucket() for slot in TimeOfDay}
        for entry in entries:
            if entry.mood is not None:
                buckets[time_of_day(entry.created_at)].add(energy_of(entry.mood))
        return buckets

    def overall_positivity_rate(self, entries: Iterable[JournalEntry]) -> int:
        """Percentage of mood-tagged entries with positive energy."""
        bucket = EnergyBucket()
        for entry in entries:
            if entry.mood is not None:
                bucket.add(energy_of(entry.mood))
        if bucket.total == 0:
            return 0
        return round_half_up(bucket.positive / bucket.total * 100)

    def top_mood(self, entries: Iterable[JournalEntry]) -> Mood | None:
        """Most frequent mood; ties go to the earlier ``Mood`` member."""
        return self._top_from_counts(self.mood_counts(entries))

    def summarize(self, entries: Iterable[JournalEntry]) -> MoodSummary:
        entries = [e for e in entries if e.mood is not None]
        return MoodSummary(
            counts=self.mood_counts(entries),
            by_day=self.aggregate_by_day_of_week(entries),
            by_time=self.aggregate_by_time_of_day(entries),
            positivity_rate=self.overall_positivity_rate(entries),
            total_entries=len(entries),
        )

    def generate_insights(self, entries: Iterable[JournalEntry]) -> list[MoodInsight]:
        summary = self.summarize(entries)
        insights: list[MoodInsight] = []

        best_day = self._best_bucket(summary.by_day, Energy.POSITIVE)
        if best_day is not None and summary.by_day[best_day].rate(Energy.POSITIVE) > 0.5:
            name = DAY_NAMES[best_day]
            insights.append(
                MoodInsight(
                    InsightKind.POSITIVE,
                    f"{name}s are your best days",
                    f"You tend to feel more positive on {name}s. Consider why that might be.",
                )
            )

        worst_day = self._best_bucket(summary.by_day, Energy.NEGATIVE)
        if worst_day is not None and summary.by_day[worst_day].rate(Energy.NEGATIVE) > 0.3:
            name = DAY_NAMES[worst_day]
            insights.append(
                MoodInsight(
                    InsightKind.ACTIONABLE,
                    f"{name}s might need attention",
                    f"You often feel more challenged on {name}s. "
                    "What could make these days easier?",
                )
            )

        best_time = self._best_bucket(summary.by_time, Energy.POSITIVE)
        if best_time is not None and summary.by_time[best_time].rate(Energy.POSITIVE) > 0.5:
            insights.append(
                MoodInsight(
                    InsightKind.POSITIVE,
                    f"{TIME_LABELS[best_time]} is your sweet spot",
                    "Consider doing important tasks during this time "
                    "when your mood is typically better.",
                )
            )

        if summary.total_entries >= self.min_mood_samples:
            rate = summary.positivity_rate
            if rate >= 70:
                insights.append(
                    MoodInsight(
                        InsightKind.POSITIVE,
                        "You're thriving!",
                        f"{rate}% positive moods recently. Keep doing what you're doing!",
                    )
                )
            elif rate >= 50:
                insights.append(
                    MoodInsight(
                        InsightKind.NEUTRAL,
                        "Balanced emotional range",
                        "You're experiencing a healthy mix of emotions. "
                        "That's completely normal.",
                    )
                )
            elif rate < 40:
                insights.append(
                    MoodInsight(
                        InsightKind.ACTIONABLE,
                        "Consider reaching out",
                        "Your recent moods suggest you might benefit from extra support. "
                        "That's okay.",
                    )
                )

        top = self._top_from_counts(summary.counts)
        if top is not None and summary.counts[top] >= self.min_bucket_samples:
            label = top.value.capitalize()
            kind = InsightKind.POSITIVE if energy_of(top) is Energy.POSITIVE else InsightKind.NEUTRAL
            insights.append(
                MoodInsight(
                    kind,
                    f'"{label}" is your signature mood',
                    f"You felt {top.value} {summary.counts[top]} times recently.",
                )
            )

        if summary.total_entries >= self.consistency_samples:
            insights.append(
                MoodInsight(
                    InsightKind.POSITIVE,
                    "Great tracking consistency!",
                    "Tracking your mood regularly helps you understand patterns "
                    "and make positive changes.",
                )
            )
        elif summary.total_entries < self.min_mood_samples:
            insights.append(
                MoodInsight(
                    InsightKind.ACTIONABLE,
                    "Track more to unlock insights",
                    "Log your mood daily for a week to see meaningful patterns emerge.",
                )
            )

        return insights

    def _best_bucket(self, buckets: dict[K, EnergyBucket], energy: Energy) -> K | None:
        """Key of the bucket with the highest ``energy`` rate among sampled buckets.

        Buckets below ``min_bucket_samples`` are skipped; the first key wins ties.
        """
        best: K | None = None
        best_rate = 0.0
        for key, bucket in buckets.items():
            if bucket.total < self.min_bucket_samples:
                continue
            rate = bucket.rate(energy)
            if rate > best_rate:
                best, best_rate = key, rate
        return best

    @staticmethod
    def _top_from_counts(counts: dict[Mood, int]) -> Mood | None:
        if not counts:
            return None
        best = max(counts.values())
        return next(mood for mood, n in counts.items() if n == best)
