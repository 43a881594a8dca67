"""Behavioral insight derived from journal entries.

Writing streaks, word statistics, milestones, mood patterns, and
on-this-day recall.  Everything here is a pure function of the entries
passed in.
"""

from pagebound.insights.memories import MemoryGroup, group_by_years_ago, on_this_day
from pagebound.insights.milestones import (
    MILESTONES,
    Milestone,
    current_milestone,
    next_milestone,
    progress_to_next,
)
from pagebound.insights.mood import (
    DAY_NAMES,
    TIME_LABELS,
    Energy,
    EnergyBucket,
    InsightKind,
    MoodAnalyzer,
    MoodInsight,
    MoodSummary,
    TimeOfDay,
    energy_of,
)
from pagebound.insights.streaks import DateRange, StreakAnalyzer, WritingStats

__all__ = [
    "DAY_NAMES",
    "MILESTONES",
    "TIME_LABELS",
    "DateRange",
    "Energy",
    "EnergyBucket",
    "InsightKind",
    "MemoryGroup",
    "Milestone",
    "MoodAnalyzer",
    "MoodInsight",
    "MoodSummary",
    "StreakAnalyzer",
    "TimeOfDay",
    "WritingStats",
    "current_milestone",
    "energy_of",
    "group_by_years_ago",
    "next_milestone",
    "on_this_day",
    "progress_to_next",
]
