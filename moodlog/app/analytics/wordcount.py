from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from ..db.models import JournalEntry

MONDAY = 0


def week_start(value: date | datetime) -> date:
    day = value.date() if isinstance(value, datetime) else value
    diff = (7 + (day.weekday() - MONDAY)) % 7
    return day - timedelta(days=diff)


def average_word_count(entries: Sequence[JournalEntry]) -> float:
    if not entries:
        return 0.0
    return round(sum(entry.word_count for entry in entries) / len(entries), 1)


def word_count_trend(entries: Sequence[JournalEntry]) -> dict[date, float]:
    buckets: defaultdict[date, list[int]] = defaultdict(list)
    for entry in entries:
        buckets[week_start(entry.entry_date)].append(entry.word_count)
    return {
        start: round(sum(counts) / len(counts), 1)
        for start, counts in sorted(buckets.items())
    }


__all__ = ["average_word_count", "week_start", "word_count_trend"]
