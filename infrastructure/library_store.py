"""Library persistence for media items and collections.

Every mutation is a whole-array read-modify-write against one key of a
`KeyValueBackend`: load the full array, change it in memory, write the full
array back. There is no locking; two overlapping writes to the same key can
lose the earlier one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, TypeVar

from loguru import logger

from core.errors import NotFoundError, StorageReadError, StorageWriteError, ValidationError
from core.models import Collection, MediaItem, MediaType, NewMediaItem
from core.services.filter_service import count_distinct_tags, filter_media, group_by_first_tag
from core.services.interfaces import (
    CollectionPreview,
    KeyValueBackend,
    LibraryStats,
    PickedAsset,
)
from infrastructure.json_codec import (
    collection_from_dict,
    collection_to_dict,
    decode_array,
    encode_array,
    media_from_dict,
    media_to_dict,
)
from infrastructure.utils import new_id, utc_now

T = TypeVar("T")


@dataclass
class StorageKeys:
    """Backend keys holding the two record arrays."""

    media: str = "media"
    collections: str = "collections"


def _snapshot(item: MediaItem) -> MediaItem:
    """Copy `item` so later edits to either side stay independent."""
    return replace(item, tags=list(item.tags))


def _require_photos(photos: Sequence[MediaItem]) -> None:
    if any(p is None for p in photos):
        raise ValidationError(
            "Invalid Photos", "Collection photos cannot contain empty entries."
        )


class LibraryStore:
    """Single source of truth for media items and collections."""

    # Pure projections, exposed here so callers only need the store.
    filter_media = staticmethod(filter_media)
    group_by_first_tag = staticmethod(group_by_first_tag)

    def __init__(
        self,
        backend: KeyValueBackend,
        keys: StorageKeys | None = None,
        allow_empty_on_create: bool = False,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Create a LibraryStore.

        Args:
            backend: Key-value backend holding the JSON arrays.
            keys: Key names (defaults to "media" and "collections").
            allow_empty_on_create: Allow `create_collection` with no photos.
            clock: Source of `created_at` timestamps (defaults to UTC now).
            id_factory: Source of record ids (defaults to random UUIDs).
        """
        self._backend = backend
        self._keys = keys or StorageKeys()
        self.allow_empty_on_create = allow_empty_on_create
        self._clock = clock or utc_now
        self._new_id = id_factory or new_id

    async def _read(self, key: str, parse: Callable[[Any], T]) -> list[T]:
        try:
            text = await self._backend.get(key)
        except (OSError, ValueError) as ex:
            logger.error("Read {} failed: {}", key, ex)
            raise StorageReadError(key, str(ex)) from ex
        if text is None:
            return []
        try:
            return decode_array(text, parse)
        except ValueError as ex:
            logger.warning("Malformed data under {}: {}", key, ex)
            raise StorageReadError(key, str(ex)) from ex

    async def _write(
        self, key: str, records: Sequence[T], to_dict: Callable[[T], dict[str, Any]]
    ) -> None:
        text = encode_array(records, to_dict)
        try:
            await self._backend.set(key, text)
        except OSError as ex:
            logger.error("Write {} failed: {}", key, ex)
            raise StorageWriteError(key, str(ex)) from ex

    async def load_media(self) -> list[MediaItem]:
        """Return all media items in insertion order."""
        return await self._read(self._keys.media, media_from_dict)

    async def _save_media(self, items: Sequence[MediaItem]) -> None:
        await self._write(self._keys.media, items, media_to_dict)

    def _materialize(self, new: NewMediaItem) -> MediaItem:
        if not new.uri or not new.uri.strip():
            raise ValidationError("Invalid Media", "Media item needs a URI.")
        return MediaItem(
            id=self._new_id(),
            uri=new.uri,
            type=new.type or MediaType.IMAGE,
            tags=list(new.tags),
            category=new.category,
            created_at=self._clock(),
        )

    def new_items(self, assets: Iterable[PickedAsset]) -> list[MediaItem]:
        """Turn picker selections into untagged items without storing them."""
        return [
            self._materialize(NewMediaItem(uri=a.uri, type=a.type or MediaType.IMAGE))
            for a in assets
        ]

    async def add_media(self, items: Sequence[NewMediaItem]) -> list[MediaItem]:
        """Append new items to the library and return them with ids populated.

        Raises:
            ValidationError: An input has an empty URI; nothing is written.
            StorageReadError: The existing array could not be loaded.
            StorageWriteError: The write failed; treat it as not committed.
        """
        created = [self._materialize(n) for n in items]
        if not created:
            return []
        existing = await self.load_media()
        await self._save_media([*existing, *created])
        logger.info(
            "Added {} media item(s); library now holds {}",
            len(created),
            len(existing) + len(created),
        )
        return created

    async def add_to_gallery(self, item: MediaItem) -> MediaItem | None:
        """Copy `item` into the library under a fresh id.

        Returns:
            The stored copy, or None if an item with the same URI is already
            in the library.
        """
        existing = await self.load_media()
        if any(m.uri == item.uri for m in existing):
            logger.info("Media already in library: {}", item.uri)
            return None
        copy = replace(_snapshot(item), id=self._new_id(), created_at=self._clock())
        await self._save_media([*existing, copy])
        logger.info("Added {} to library", copy.id)
        return copy

    async def delete_media(self, ids: Iterable[str]) -> int:
        """Remove items whose id is in `ids`; return how many were removed."""
        doomed = set(ids)
        existing = await self.load_media()
        kept = [m for m in existing if m.id not in doomed]
        await self._save_media(kept)
        removed = len(existing) - len(kept)
        logger.info("Deleted {} media item(s)", removed)
        return removed

    async def load_collections(self) -> list[Collection]:
        """Return all collections in insertion order."""
        return await self._read(self._keys.collections, collection_from_dict)

    async def _save_collections(self, collections: Sequence[Collection]) -> None:
        await self._write(self._keys.collections, collections, collection_to_dict)

    def validate_collection_name(self, name: str) -> str:
        """Return the trimmed name, or raise `ValidationError` if it is blank."""
        trimmed = (name or "").strip()
        if not trimmed:
            raise ValidationError("Name Required", "Please enter a collection name.")
        return trimmed

    async def create_collection(self, name: str, photos: Sequence[MediaItem]) -> Collection:
        """Create a collection holding snapshots of `photos`.

        Raises:
            ValidationError: Blank name, an empty entry in `photos`, or no photos
                while `allow_empty_on_create` is off. Nothing is written.
        """
        trimmed = self.validate_collection_name(name)
        _require_photos(photos)
        if not photos and not self.allow_empty_on_create:
            raise ValidationError(
                "No Photos", "Please select at least one photo for the collection."
            )

        collection = Collection(
            id=self._new_id(),
            name=trimmed,
            photos=[_snapshot(p) for p in photos],
            created_at=self._clock(),
        )
        existing = await self.load_collections()
        await self._save_collections([*existing, collection])
        logger.info(
            "Created collection {} ({}) with {} photo(s)",
            collection.name,
            collection.id,
            len(photos),
        )
        return collection

    async def _update_collection(
        self, collection_id: str, change: Callable[[Collection], None]
    ) -> Collection:
        collections = await self.load_collections()
        target = next((c for c in collections if c.id == collection_id), None)
        if target is None:
            logger.warning("Collection {} not found", collection_id)
            raise NotFoundError("Collection", collection_id)
        change(target)
        await self._save_collections(collections)
        return target

    async def add_photos_to_collection(
        self, collection_id: str, photos: Sequence[MediaItem]
    ) -> Collection:
        """Append snapshots of `photos`; repeated ids are kept as-is."""
        _require_photos(photos)

        def change(c: Collection) -> None:
            c.photos = [*c.photos, *(_snapshot(p) for p in photos)]

        updated = await self._update_collection(collection_id, change)
        logger.info("Added {} photo(s) to collection {}", len(photos), collection_id)
        return updated

    async def remove_photos_from_collection(
        self, collection_id: str, photo_ids: Iterable[str]
    ) -> Collection:
        """Drop photos whose id is in `photo_ids`; unknown ids are ignored."""
        doomed = set(photo_ids)

        def change(c: Collection) -> None:
            c.photos = [p for p in c.photos if p.id not in doomed]

        updated = await self._update_collection(collection_id, change)
        logger.info("Removed photos {} from collection {}", sorted(doomed), collection_id)
        return updated

    async def delete_collections(self, ids: Iterable[str]) -> int:
        """Remove whole collections; the media library is left untouched."""
        doomed = set(ids)
        existing = await self.load_collections()
        kept = [c for c in existing if c.id not in doomed]
        await self._save_collections(kept)
        removed = len(existing) - len(kept)
        logger.info("Deleted {} collection(s)", removed)
        return removed

    async def collections_preview(self) -> list[CollectionPreview]:
        """Group the current library by first tag; recomputed on every call."""
        grouped = group_by_first_tag(await self.load_media())
        return [
            CollectionPreview(
                name=name, count=len(items), cover_uri=items[0].uri, first_item=items[0]
            )
            for name, items in grouped.items()
        ]

    async def library_stats(self) -> LibraryStats:
        media = await self.load_media()
        collections = await self.load_collections()
        return LibraryStats(
            photos=len(media),
            tags=count_distinct_tags(media),
            collections=len(collections),
        )
