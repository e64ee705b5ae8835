from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from itertools import pairwise

_ONE_DAY = timedelta(days=1)


@dataclass
class StreakStats:
    current: int = 0
    longest: int = 0
    missed_days: list[date] = field(default_factory=list)


def normalize_dates(values: Iterable[date | datetime]) -> set[date]:
    """Drop the time component and deduplicate."""

    return {value.date() if isinstance(value, datetime) else value for value in values}


def current_streak(entry_dates: Iterable[date | datetime], reference: date | datetime) -> int:
    """Count consecutive days with entries, walking back from ``reference``.

    The scan starts at ``reference`` itself, so a reference day without an
    entry yields 0.
    """

    dates = normalize_dates(entry_dates)
    current = reference.date() if isinstance(reference, datetime) else reference
    streak = 0
    while current in dates:
        streak += 1
        current -= _ONE_DAY
    return streak


def longest_streak(entry_dates: Iterable[date | datetime]) -> int:
    sorted_dates = sorted(normalize_dates(entry_dates))
    if not sorted_dates:
        return 0
    streak = 1
    longest = 1
    for previous, current in pairwise(sorted_dates):
        if current - previous == _ONE_DAY:
            streak += 1
            longest = max(longest, streak)
        else:
            streak = 1
    return longest


def missed_days(entry_dates: Iterable[date | datetime]) -> list[date]:
    dates = normalize_dates(entry_dates)
    if len(dates) < 2:
        return []
    first = min(dates)
    span = (max(dates) - first).days
    return [
        day
        for day in (first + timedelta(days=offset) for offset in range(span + 1))
        if day not in dates
    ]


def compute_streak_stats(
    entry_dates: Iterable[date | datetime],
    reference: date | datetime,
) -> StreakStats:
    dates = normalize_dates(entry_dates)
    if not dates:
        return StreakStats()
    return StreakStats(
        current=current_streak(dates, reference),
        longest=longest_streak(dates),
        missed_days=missed_days(dates),
    )


__all__ = [
    "StreakStats",
    "compute_streak_stats",
    "current_streak",
    "longest_streak",
    "missed_days",
    "normalize_dates",
]
