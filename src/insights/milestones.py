"""Streak milestones."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Milestone:
    days: int
    title: str
    description: str


MILESTONES: tuple[Milestone, ...] = (
    Milestone(3, "Seedling", "You planted the seed!"),
    Milestone(7, "Week Warrior", "One full week!"),
    Milestone(14, "Rising Star", "Two weeks strong!"),
    Milestone(21, "Habit Formed", "21 days - officially a habit!"),
    Milestone(30, "Diamond Mind", "One month milestone!"),
    Milestone(50, "Momentum Master", "50 days of growth!"),
    Milestone(75, "Journal Royalty", "75 days - you're dedicated!"),
    Milestone(100, "Century Club", "100 days! Incredible!"),
    Milestone(180, "Half-Year Hero", "6 months of journaling!"),
    Milestone(365, "Year Champion", "A full year! Legendary!"),
)


def current_milestone(streak: int) -> Milestone | None:
    """Highest milestone reached by ``streak``."""
    reached = [m for m in MILESTONES if streak >= m.days]
    return reached[-1] if reached else None


def next_milestone(streak: int) -> Milestone | None:
    """First milestone not yet reached, or ``None`` past the last one."""
    return next((m for m in MILESTONES if streak < m.days), None)


def progress_to_next(streak: int) -> int:
    """Percent of the way from the current milestone to the next (100 when all are done)."""
    upcoming = next_milestone(streak)
    if upcoming is None:
        return 100
    reached = current_milestone(streak)
    floor = reached.days if reached else 0
    return int((streak - floor) / (upcoming.days - floor) * 100)
