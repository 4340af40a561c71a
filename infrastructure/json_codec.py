"""JSON persistence format for media items and collections.

Records are stored as camelCase JSON objects inside one array per key.
Parsing is strict: any structural problem raises `ValueError` so the store
can distinguish a malformed value from a key that was never written.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import json
from typing import Any, TypeVar

from core.models import Collection, MediaItem, MediaType
from infrastructure.utils import format_iso_datetime, parse_iso_datetime

T = TypeVar("T")


def _require_str(raw: dict[str, Any], name: str, *, allow_empty: bool = False) -> str:
    value = raw.get(name)
    if not isinstance(value, str):
        raise ValueError(f"field '{name}' must be a string, got {type(value).__name__}")
    if not allow_empty and not value.strip():
        raise ValueError(f"field '{name}' must not be empty")
    return value


def _parse_tags(raw: dict[str, Any]) -> list[str]:
    tags = raw.get("tags", [])
    if tags is None:
        return []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise ValueError("field 'tags' must be a list of strings")
    return list(tags)


def media_to_dict(item: MediaItem) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": item.id,
        "uri": item.uri,
        "type": item.type.value,
        "tags": list(item.tags),
        "createdAt": format_iso_datetime(item.created_at),
    }
    if item.category is not None:
        data["category"] = item.category
    return data


def media_from_dict(raw: Any) -> MediaItem:
    """Build a `MediaItem` from its stored JSON object.

    A missing `type` defaults to image, matching how items were written
    before the field existed.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"media record must be an object, got {type(raw).__name__}")
    type_value = raw.get("type") or MediaType.IMAGE.value
    try:
        media_type = MediaType(type_value)
    except ValueError as ex:
        raise ValueError(f"unknown media type: {type_value!r}") from ex
    category = raw.get("category")
    if category is not None and not isinstance(category, str):
        raise ValueError("field 'category' must be a string")
    return MediaItem(
        id=_require_str(raw, "id"),
        uri=_require_str(raw, "uri"),
        type=media_type,
        tags=_parse_tags(raw),
        category=category,
        created_at=parse_iso_datetime(_require_str(raw, "createdAt")),
    )


def collection_to_dict(collection: Collection) -> dict[str, Any]:
    return {
        "id": collection.id,
        "name": collection.name,
        "photos": [media_to_dict(p) for p in collection.photos],
        "createdAt": format_iso_datetime(collection.created_at),
    }


def collection_from_dict(raw: Any) -> Collection:
    if not isinstance(raw, dict):
        raise ValueError(f"collection record must be an object, got {type(raw).__name__}")
    photos = raw.get("photos", [])
    if not isinstance(photos, list):
        raise ValueError("field 'photos' must be a list")
    return Collection(
        id=_require_str(raw, "id"),
        name=_require_str(raw, "name"),
        photos=[media_from_dict(p) for p in photos],
        created_at=parse_iso_datetime(_require_str(raw, "createdAt")),
    )


def decode_array(text: str, parse: Callable[[Any], T]) -> list[T]:
    """Decode a stored JSON array and parse each element.

    Raises:
        ValueError: The text is not JSON, not an array, or an element is
            malformed or nested too deeply (`json.JSONDecodeError` is a
            `ValueError`).
    """
    try:
        data = json.loads(text)
    except RecursionError as ex:
        raise ValueError("JSON value is nested too deeply") from ex
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    records: list[T] = []
    for index, raw in enumerate(data):
        try:
            records.append(parse(raw))
        except (ValueError, TypeError) as ex:
            raise ValueError(f"record #{index}: {ex}") from ex
    return records


def encode_array(records: Sequence[T], to_dict: Callable[[T], dict[str, Any]]) -> str:
    return json.dumps([to_dict(r) for r in records], ensure_ascii=False)
