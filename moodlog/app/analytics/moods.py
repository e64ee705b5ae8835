from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from ..db.models import JournalEntry, Mood


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


@dataclass
class MoodTrendPoint:
    day: date
    positive: int = 0
    neutral: int = 0
    negative: int = 0

    def increment(self, sentiment: str) -> None:
        if sentiment == Sentiment.POSITIVE.value:
            self.positive += 1
        elif sentiment == Sentiment.NEUTRAL.value:
            self.neutral += 1
        elif sentiment == Sentiment.NEGATIVE.value:
            self.negative += 1


def _mood_mentions(entry: JournalEntry) -> Iterator[int]:
    yield entry.primary_mood_id
    if entry.secondary_mood1_id is not None:
        yield entry.secondary_mood1_id
    if entry.secondary_mood2_id is not None:
        yield entry.secondary_mood2_id


def _entry_day(entry: JournalEntry) -> date:
    value = entry.entry_date
    return value.date() if isinstance(value, datetime) else value


def sentiment_distribution(
    entries: Iterable[JournalEntry],
    moods: Sequence[Mood],
) -> dict[str, int]:
    """Count sentiment mentions over primary and secondary moods.

    An entry contributes up to three mentions. Mood ids missing from the
    catalog are skipped.
    """

    by_id = {mood.id: mood for mood in moods}
    counts = {sentiment.value: 0 for sentiment in Sentiment}
    for entry in entries:
        for mood_id in _mood_mentions(entry):
            mood = by_id.get(mood_id)
            if mood is not None and mood.sentiment in counts:
                counts[mood.sentiment] += 1
    return counts


def sentiment_percentages(distribution: dict[str, int]) -> dict[str, float]:
    total = sum(distribution.values())
    if total <= 0:
        return {}
    return {
        sentiment: round(count * 100.0 / total, 1)
        for sentiment, count in distribution.items()
    }


def mood_usage(entries: Iterable[JournalEntry], moods: Sequence[Mood]) -> dict[str, int]:
    """Mentions per mood name, highest first; ties ordered by name."""

    names = {mood.id: mood.name for mood in moods}
    counter: Counter[str] = Counter()
    for entry in entries:
        for mood_id in _mood_mentions(entry):
            name = names.get(mood_id)
            if name is not None:
                counter[name] += 1
    ranked = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return dict(ranked)


def most_frequent_mood(
    entries: Iterable[JournalEntry],
    moods: Sequence[Mood],
) -> tuple[str, int] | None:
    usage = mood_usage(entries, moods)
    if not usage:
        return None
    return next(iter(usage.items()))


def mood_trend(
    entries: Iterable[JournalEntry],
    moods: Sequence[Mood],
) -> list[MoodTrendPoint]:
    # Only the primary mood feeds the daily trend.
    sentiments = {mood.id: mood.sentiment for mood in moods}
    points: dict[date, MoodTrendPoint] = {}
    for entry in entries:
        day = _entry_day(entry)
        point = points.setdefault(day, MoodTrendPoint(day=day))
        sentiment = sentiments.get(entry.primary_mood_id)
        if sentiment is not None:
            point.increment(sentiment)
    return [points[day] for day in sorted(points)]


__all__ = [
    "MoodTrendPoint",
    "Sentiment",
    "mood_trend",
    "mood_usage",
    "most_frequent_mood",
    "sentiment_distribution",
    "sentiment_percentages",
]
