from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from moodlog.app.core.config import normalize_database_url
from moodlog.app.db.models import Base, Mood, SettingEntry, Tag

SEED_MOODS: tuple[tuple[str, str, str], ...] = (
    ("Happy", "Positive", "😊"),
    ("Excited", "Positive", "🤩"),
    ("Relaxed", "Positive", "😌"),
    ("Grateful", "Positive", "🙏"),
    ("Confident", "Positive", "😎"),
    ("Calm", "Neutral", "😐"),
    ("Thoughtful", "Neutral", "🤔"),
    ("Curious", "Neutral", "🧐"),
    ("Nostalgic", "Neutral", "💭"),
    ("Bored", "Neutral", "🥱"),
    ("Sad", "Negative", "😔"),
    ("Angry", "Negative", "😡"),
    ("Stressed", "Negative", "😫"),
    ("Lonely", "Negative", "😞"),
    ("Anxious", "Negative", "😰"),
)

SEED_TAGS: tuple[str, ...] = (
    "Work",
    "Career",
    "Studies",
    "Family",
    "Friends",
    "Relationships",
    "Health",
    "Fitness",
    "Personal Growth",
    "Self-care",
    "Hobbies",
    "Travel",
    "Nature",
    "Finance",
    "Spirituality",
    "Birthday",
    "Holiday",
    "Vacation",
    "Celebration",
    "Exercise",
    "Reading",
    "Writing",
    "Cooking",
    "Meditation",
    "Yoga",
    "Music",
    "Shopping",
    "Parenting",
    "Projects",
    "Planning",
    "Reflection",
)


def create_engine(database_url: str | None) -> AsyncEngine:
    return create_async_engine(
        normalize_database_url(database_url),
        future=True,
        echo=False,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def _seed_catalogs(session: AsyncSession) -> None:
    existing = await session.execute(select(Mood.name, Mood.sentiment))
    known = {(name.lower(), sentiment.lower()) for name, sentiment in existing.all()}
    for name, sentiment, emoji in SEED_MOODS:
        if (name.lower(), sentiment.lower()) not in known:
            session.add(Mood(name=name, sentiment=sentiment, emoji=emoji))

    tag_count = await session.scalar(select(func.count(Tag.id)))
    if not tag_count:
        session.add_all(
            [Tag(name=name, is_predefined=True, usage_count=0) for name in SEED_TAGS]
        )


async def init_db(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
    version: str,
    *,
    seed: bool = True,
) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        if seed:
            await _seed_catalogs(session)
        result = await session.execute(
            select(SettingEntry).where(SettingEntry.key == "schema_version")
        )
        setting = result.scalar_one_or_none()
        if setting is None:
            session.add(SettingEntry(key="schema_version", value=version))
        else:
            setting.value = version
        await session.commit()


__all__ = [
    "SEED_MOODS",
    "SEED_TAGS",
    "create_engine",
    "create_session_factory",
    "init_db",
]
