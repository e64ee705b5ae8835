"""Analytics and streak engine over journal entries."""

from .engine import AnalyticsEngine, AnalyticsResult, SummaryStats
from .moods import MoodTrendPoint, Sentiment
from .streaks import StreakStats

__all__ = [
    "AnalyticsEngine",
    "AnalyticsResult",
    "MoodTrendPoint",
    "Sentiment",
    "StreakStats",
    "SummaryStats",
]
