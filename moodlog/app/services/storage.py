from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, datetime

from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..db.models import EntryTag, JournalEntry, Mood, Tag


class StorageError(Exception):
    """Base error for storage-level conflicts."""


class DuplicateEntryError(StorageError):
    """Raised when an entry already exists for the requested calendar day."""

    def __init__(self, entry_date: date) -> None:
        super().__init__(f"An entry already exists for {entry_date.isoformat()}.")
        self.entry_date = entry_date


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def count_words(content: str | None) -> int:
    if not content or not content.strip():
        return 0
    return len(content.split())


class StorageService:
    """Persist journal entries, moods and tags."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def healthcheck(self) -> None:
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))

    # -- journal entries -------------------------------------------------
    async def list_entries(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> list[JournalEntry]:
        query = select(JournalEntry)
        if start is not None:
            query = query.where(JournalEntry.entry_date >= _as_date(start))
        if end is not None:
            query = query.where(JournalEntry.entry_date <= _as_date(end))
        async with self._session_factory() as session:
            result = await session.execute(query.order_by(JournalEntry.entry_date.asc()))
            return list(result.scalars().all())

    async def create_entry(
        self,
        *,
        entry_date: date | datetime,
        primary_mood_id: int,
        secondary_mood1_id: int | None = None,
        secondary_mood2_id: int | None = None,
        title: str = "",
        content: str = "",
        category: str = "",
        tag_ids: Sequence[int] = (),
    ) -> JournalEntry:
        day = _as_date(entry_date)
        async with self._session_factory() as session:
            if await self._entry_id_for(session, day) is not None:
                raise DuplicateEntryError(day)
            now = datetime.utcnow()
            entry = JournalEntry(
                title=title,
                content=content,
                entry_date=day,
                created_at=now,
                updated_at=now,
                primary_mood_id=primary_mood_id,
                secondary_mood1_id=secondary_mood1_id,
                secondary_mood2_id=secondary_mood2_id,
                category=category,
                word_count=count_words(content),
            )
            session.add(entry)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateEntryError(day) from exc
            await session.refresh(entry)

        if tag_ids:
            await self.set_entry_tags(entry.id, tag_ids)
        return entry

    @staticmethod
    async def _entry_id_for(session: AsyncSession, day: date) -> int | None:
        return await session.scalar(
            select(JournalEntry.id).where(JournalEntry.entry_date == day)
        )

    # -- mood catalog ----------------------------------------------------
    async def list_all_moods(self) -> list[Mood]:
        async with self._session_factory() as session:
            result = await session.execute(select(Mood).order_by(Mood.id.asc()))
            return list(result.scalars().all())

    # -- tag catalog and associations ------------------------------------
    async def list_all_tags(self) -> list[Tag]:
        async with self._session_factory() as session:
            result = await session.execute(select(Tag).order_by(Tag.name.asc()))
            return list(result.scalars().all())

    async def list_entry_tag_associations(self) -> list[tuple[int, int]]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(EntryTag.journal_entry_id, EntryTag.tag_id).order_by(EntryTag.id.asc())
            )
            return [(entry_id, tag_id) for entry_id, tag_id in result.all()]

    async def create_tag(self, name: str) -> Tag:
        cleaned = name.strip()
        async with self._session_factory() as session:
            existing = await session.scalar(
                select(Tag).where(func.lower(Tag.name) == cleaned.lower())
            )
            if existing is not None:
                return existing
            tag = Tag(name=cleaned, is_predefined=False, usage_count=0)
            session.add(tag)
            await session.commit()
            await session.refresh(tag)
            return tag

    async def set_entry_tags(self, entry_id: int, tag_ids: Iterable[int]) -> None:
        """Replace the tags of an entry and bump usage counters."""

        async with self._session_factory() as session:
            await session.execute(
                delete(EntryTag).where(EntryTag.journal_entry_id == entry_id)
            )
            now = datetime.utcnow()
            for tag_id in tag_ids:
                session.add(EntryTag(journal_entry_id=entry_id, tag_id=tag_id, created_at=now))
                tag = await session.get(Tag, tag_id)
                if tag is not None:
                    tag.usage_count += 1
            await session.commit()

    async def recalculate_tag_usage_counts(self) -> dict[str, int]:
        async with self._session_factory() as session:
            tags = list((await session.execute(select(Tag))).scalars().all())
            rows = await session.execute(select(EntryTag.tag_id))
            counts = Counter(tag_id for (tag_id,) in rows.all())
            for tag in tags:
                tag.usage_count = counts.get(tag.id, 0)
            await session.commit()
            return {tag.name: tag.usage_count for tag in tags}


__all__ = [
    "DuplicateEntryError",
    "StorageError",
    "StorageService",
    "count_words",
]
