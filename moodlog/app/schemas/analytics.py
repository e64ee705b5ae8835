from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class AnalyticsResponse(BaseModel):
    mood_distribution: dict[str, int]
    mood_percentages: dict[str, float]
    most_frequent_mood: str | None = None
    most_frequent_mood_count: int = 0
    current_streak: int = Field(..., ge=0)
    longest_streak: int = Field(..., ge=0)
    missed_days: list[date]
    most_used_tags: dict[str, int]
    tag_breakdown: dict[str, float]
    word_count_trend: dict[date, float]
    average_word_count: float
    total_entries: int = Field(..., ge=0)
    first_entry_date: date | None = None
    last_entry_date: date | None = None

    model_config = ConfigDict(from_attributes=True)


class StreakStatsResponse(BaseModel):
    current: int = Field(..., ge=0)
    longest: int = Field(..., ge=0)
    missed_days: list[date]

    model_config = ConfigDict(from_attributes=True)


class MoodTrendItem(BaseModel):
    day: date
    positive: int = Field(..., ge=0)
    neutral: int = Field(..., ge=0)
    negative: int = Field(..., ge=0)

    model_config = ConfigDict(from_attributes=True)


class MoodTrendResponse(BaseModel):
    start: date
    end: date
    items: list[MoodTrendItem]


class SummaryStatsResponse(BaseModel):
    total_entries: int
    first_entry_date: date | None = None
    last_entry_date: date | None = None
    total_words: int
    average_words_per_entry: float
    current_streak: int
    longest_streak: int

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "AnalyticsResponse",
    "MoodTrendItem",
    "MoodTrendResponse",
    "StreakStatsResponse",
    "SummaryStatsResponse",
]
