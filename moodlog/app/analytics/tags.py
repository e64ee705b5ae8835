from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence

from ..db.models import JournalEntry, Tag

DEFAULT_TOP_TAGS = 10


def _relevant_associations(
    entries: Iterable[JournalEntry],
    associations: Iterable[tuple[int, int]],
) -> tuple[int, list[tuple[int, int]]]:
    entry_ids = {entry.id for entry in entries}
    rows = [(entry_id, tag_id) for entry_id, tag_id in associations if entry_id in entry_ids]
    return len(entry_ids), rows


def most_used_tags(
    entries: Iterable[JournalEntry],
    associations: Iterable[tuple[int, int]],
    tags: Sequence[Tag],
    top_n: int = DEFAULT_TOP_TAGS,
) -> dict[str, int]:
    """Top tags by association rows within the given entries."""

    _, rows = _relevant_associations(entries, associations)
    names = {tag.id: tag.name for tag in tags}
    counts = Counter(names[tag_id] for _, tag_id in rows if tag_id in names)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return dict(ranked[:top_n])


def tag_breakdown(
    entries: Iterable[JournalEntry],
    associations: Iterable[tuple[int, int]],
    tags: Sequence[Tag],
) -> dict[str, float]:
    """Share of entries carrying each tag, counted once per entry."""

    total, rows = _relevant_associations(entries, associations)
    if total == 0:
        return {}
    names = {tag.id: tag.name for tag in tags}
    tagged: defaultdict[str, set[int]] = defaultdict(set)
    for entry_id, tag_id in rows:
        name = names.get(tag_id)
        if name is not None:
            tagged[name].add(entry_id)
    ranked = sorted(tagged.items(), key=lambda item: (-len(item[1]), item[0]))
    return {name: round(len(ids) * 100.0 / total, 1) for name, ids in ranked}


__all__ = ["DEFAULT_TOP_TAGS", "most_used_tags", "tag_breakdown"]
