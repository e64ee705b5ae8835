from __future__ import annotations

import calendar
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime

from ..core.config import Settings
from ..metrics import ANALYTICS_LATENCY, ANALYTICS_REQUESTS
from ..services.storage import StorageService
from .moods import (
    MoodTrendPoint,
    most_frequent_mood,
    mood_trend,
    sentiment_distribution,
    sentiment_percentages,
)
from .streaks import StreakStats, compute_streak_stats
from .tags import most_used_tags, tag_breakdown
from .wordcount import average_word_count, word_count_trend

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsResult:
    mood_distribution: dict[str, int] = field(default_factory=dict)
    mood_percentages: dict[str, float] = field(default_factory=dict)
    most_frequent_mood: str | None = None
    most_frequent_mood_count: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    missed_days: list[date] = field(default_factory=list)
    most_used_tags: dict[str, int] = field(default_factory=dict)
    tag_breakdown: dict[str, float] = field(default_factory=dict)
    word_count_trend: dict[date, float] = field(default_factory=dict)
    average_word_count: float = 0.0
    total_entries: int = 0
    first_entry_date: date | None = None
    last_entry_date: date | None = None


@dataclass
class SummaryStats:
    total_entries: int = 0
    first_entry_date: date | None = None
    last_entry_date: date | None = None
    total_words: int = 0
    average_words_per_entry: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0


def subtract_months(value: date, months: int) -> date:
    """Shift ``value`` back by calendar months, clamping the day."""

    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


class AnalyticsEngine:
    """Derive mood, streak, tag and word-count statistics from journal entries.

    Read-only: every call pulls fresh data from storage and builds a new
    result. Storage failures propagate to the caller untouched.
    """

    def __init__(
        self,
        storage: StorageService,
        *,
        settings: Settings,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings
        self._clock = clock or date.today

    async def compute_analytics(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> AnalyticsResult:
        started = time.perf_counter()
        start_day, end_day = await self._resolve_range(start, end)
        result = AnalyticsResult(first_entry_date=start_day, last_entry_date=end_day)

        entries = await self._storage.list_entries(start_day, end_day)
        result.total_entries = len(entries)

        if entries:
            moods = await self._storage.list_all_moods()
            result.mood_distribution = sentiment_distribution(entries, moods)
            result.mood_percentages = sentiment_percentages(result.mood_distribution)
            frequent = most_frequent_mood(entries, moods)
            if frequent is not None:
                result.most_frequent_mood, result.most_frequent_mood_count = frequent

            # Streaks are a lifetime property: use every entry, anchored at the range end.
            all_entries = await self._storage.list_entries()
            streaks = compute_streak_stats((e.entry_date for e in all_entries), end_day)
            result.current_streak = streaks.current
            result.longest_streak = streaks.longest
            result.missed_days = streaks.missed_days

            associations = await self._storage.list_entry_tag_associations()
            tags = await self._storage.list_all_tags()
            result.most_used_tags = most_used_tags(
                entries,
                associations,
                tags,
                top_n=self._settings.analytics_top_tags,
            )
            result.tag_breakdown = tag_breakdown(entries, associations, tags)

            result.average_word_count = average_word_count(entries)
            result.word_count_trend = word_count_trend(entries)

        self._observe("analytics", started)
        logger.info(
            "analytics computed",
            extra={
                "extra_fields": {
                    "start": start_day.isoformat(),
                    "end": end_day.isoformat(),
                    "entries": result.total_entries,
                }
            },
        )
        return result

    async def compute_streak_stats(self) -> StreakStats:
        started = time.perf_counter()
        entries = await self._storage.list_entries()
        stats = compute_streak_stats((e.entry_date for e in entries), self._clock())
        self._observe("streaks", started)
        return stats

    async def compute_mood_trend(
        self,
        start: date | datetime,
        end: date | datetime,
    ) -> list[MoodTrendPoint]:
        started = time.perf_counter()
        entries = await self._storage.list_entries(_as_date(start), _as_date(end))
        moods = await self._storage.list_all_moods()
        trend = mood_trend(entries, moods)
        self._observe("mood_trend", started)
        return trend

    async def compute_summary_stats(self) -> SummaryStats:
        started = time.perf_counter()
        entries = await self._storage.list_entries()
        summary = SummaryStats(total_entries=len(entries))
        if entries:
            dates = [e.entry_date for e in entries]
            summary.first_entry_date = min(dates)
            summary.last_entry_date = max(dates)
            summary.total_words = sum(e.word_count for e in entries)
            summary.average_words_per_entry = round(summary.total_words / len(entries), 1)
            streaks = compute_streak_stats(dates, self._clock())
            summary.current_streak = streaks.current
            summary.longest_streak = streaks.longest
        self._observe("summary", started)
        return summary

    async def _resolve_range(
        self,
        start: date | datetime | None,
        end: date | datetime | None,
    ) -> tuple[date, date]:
        start_day = _as_date(start) if start is not None else None
        end_day = _as_date(end) if end is not None else None
        if start_day is not None and end_day is not None:
            return start_day, end_day

        all_entries = await self._storage.list_entries()
        if all_entries:
            dates = [_as_date(e.entry_date) for e in all_entries]
            start_day = start_day or min(dates)
            end_day = end_day or max(dates)
        else:
            today = self._clock()
            months = self._settings.analytics_default_range_months
            start_day = subtract_months(today, months)
            end_day = today
        return start_day, end_day

    @staticmethod
    def _observe(operation: str, started: float) -> None:
        ANALYTICS_REQUESTS.labels(operation=operation).inc()
        ANALYTICS_LATENCY.labels(operation=operation).observe(time.perf_counter() - started)


__all__ = [
    "AnalyticsEngine",
    "AnalyticsResult",
    "SummaryStats",
    "subtract_months",
]
