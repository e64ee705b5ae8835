"""Database utilities for moodlog."""

from .models import (
    Base,
    EntryTag,
    JournalEntry,
    Mood,
    SettingEntry,
    Tag,
)

__all__ = [
    "Base",
    "EntryTag",
    "JournalEntry",
    "Mood",
    "SettingEntry",
    "Tag",
]
