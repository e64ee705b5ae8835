from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base declarative model."""


class Mood(Base):
    """Catalog mood with its sentiment class."""

    __tablename__ = "moods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    sentiment: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    emoji: Mapped[str] = mapped_column(String(10), default="")


class Tag(Base):
    """Predefined or user-created tag."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    is_predefined: Mapped[bool] = mapped_column(Boolean, default=False)
    usage_count: Mapped[int] = mapped_column(Integer, default=0)


class JournalEntry(Base):
    """One journal entry per calendar day.

    Mood ids are plain integers rather than foreign keys: the catalogs are
    managed separately and may lag behind entry data.
    """

    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), default="")
    content: Mapped[str] = mapped_column(Text, default="")
    entry_date: Mapped[date] = mapped_column(Date, unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
    primary_mood_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    secondary_mood1_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    secondary_mood2_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    category: Mapped[str] = mapped_column(String(100), default="")
    word_count: Mapped[int] = mapped_column(Integer, default=0)


class EntryTag(Base):
    """Association row between a journal entry and a tag."""

    __tablename__ = "entry_tags"
    __table_args__ = (
        Index("ix_entry_tags_entry_tag", "journal_entry_id", "tag_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    journal_entry_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    tag_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class SettingEntry(Base):
    """Key-value configuration stored in DB."""

    __tablename__ = "settings"
    __table_args__ = (
        UniqueConstraint("key", name="uq_settings_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


__all__ = [
    "Base",
    "EntryTag",
    "JournalEntry",
    "Mood",
    "SettingEntry",
    "Tag",
]
