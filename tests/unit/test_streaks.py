from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from moodlog.app.analytics.streaks import (
    StreakStats,
    compute_streak_stats,
    current_streak,
    longest_streak,
    missed_days,
)

GAPPY = [date(2024, 1, 4), date(2024, 1, 1), date(2024, 1, 2)]


def test_gap_breaks_streaks() -> None:
    assert longest_streak(GAPPY) == 2
    assert missed_days(GAPPY) == [date(2024, 1, 3)]
    assert current_streak(GAPPY, date(2024, 1, 4)) == 1
    assert current_streak(GAPPY, date(2024, 1, 2)) == 2


def test_current_streak_is_zero_when_reference_missing() -> None:
    assert current_streak(GAPPY, date(2024, 1, 3)) == 0
    assert current_streak(GAPPY, date(2024, 1, 5)) == 0
    assert current_streak([], date(2024, 1, 5)) == 0


def test_time_of_day_is_ignored() -> None:
    stamps = [datetime(2024, 6, 1, 23, 59), datetime(2024, 6, 2, 0, 1), datetime(2024, 6, 2, 18, 0)]
    assert longest_streak(stamps) == 2
    assert current_streak(stamps, datetime(2024, 6, 2, 7, 30)) == 2
    assert missed_days(stamps) == []


def test_empty_and_single_inputs() -> None:
    assert longest_streak([]) == 0
    assert missed_days([]) == []
    assert longest_streak([date(2024, 2, 29)]) == 1
    assert missed_days([date(2024, 2, 29)]) == []
    assert compute_streak_stats([], date(2024, 3, 1)) == StreakStats()


def test_longest_streak_crosses_month_boundary() -> None:
    dates = [date(2024, 2, 27) + timedelta(days=offset) for offset in range(5)]
    dates.append(date(2024, 3, 10))
    assert longest_streak(dates) == 5


@pytest.mark.parametrize(
    "dates",
    [
        [date(2024, 1, 1)],
        [date(2024, 1, 1), date(2024, 1, 10)],
        [date(2023, 12, 30), date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 9)],
    ],
)
def test_missed_days_fill_the_span(dates: list[date]) -> None:
    gaps = missed_days(dates)
    assert len(gaps) + len(set(dates)) == (max(dates) - min(dates)).days + 1
    assert gaps == sorted(gaps)
    assert not set(gaps) & set(dates)


def test_longest_is_never_below_current() -> None:
    dates = [date(2024, 4, day) for day in (1, 2, 3, 7, 8)]
    for offset in range(12):
        reference = date(2024, 3, 31) + timedelta(days=offset)
        assert longest_streak(dates) >= current_streak(dates, reference)


def test_compute_streak_stats_bundles_results() -> None:
    stats = compute_streak_stats(GAPPY, date(2024, 1, 4))
    assert stats.current == 1
    assert stats.longest == 2
    assert stats.missed_days == [date(2024, 1, 3)]
