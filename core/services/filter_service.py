"""Pure filtering and grouping helpers over media item sequences.

Nothing here performs I/O or mutates its inputs; callers pass freshly
loaded sequences and get new lists back.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from core.models import ALL_TAG, OTHER_GROUP, MediaItem


def filter_media(
    items: Sequence[MediaItem], tag: str | None = None, search_text: str | None = None
) -> list[MediaItem]:
    """Return items matching both the tag and the search text.

    Args:
        items: Items to filter, in display order.
        tag: Exact, case-sensitive tag to require. None or "All" disables it.
        search_text: Case-insensitive substring that at least one tag must
            contain. None or empty disables it.
    """
    result = list(items)

    if tag is not None and tag != ALL_TAG:
        result = [it for it in result if tag in it.tags]

    if search_text:
        needle = search_text.lower()
        result = [it for it in result if any(needle in t.lower() for t in it.tags)]

    return result


def group_by_first_tag(items: Iterable[MediaItem]) -> dict[str, list[MediaItem]]:
    """Group items by their first tag, keyed in first-occurrence order."""
    grouped: dict[str, list[MediaItem]] = {}
    for item in items:
        key = (item.tags[0] if item.tags else "") or OTHER_GROUP
        grouped.setdefault(key, []).append(item)
    return grouped


def available_tags(items: Iterable[MediaItem]) -> list[str]:
    """Return "All" followed by every distinct tag in first-seen order."""
    tags: dict[str, None] = {ALL_TAG: None}
    for item in items:
        for t in item.tags:
            tags.setdefault(t, None)
    return list(tags)


def count_distinct_tags(items: Iterable[MediaItem]) -> int:
    return len({t for item in items for t in item.tags})


def toggle_tag(tags: Sequence[str], tag: str) -> list[str]:
    """Return `tags` with `tag` removed if present, appended otherwise."""
    if tag in tags:
        return [t for t in tags if t != tag]
    return [*tags, tag]
