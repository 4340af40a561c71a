"""ViewModel for the landing view: counters and first-tag previews."""

from __future__ import annotations

from loguru import logger

from core.errors import LibraryError
from core.services.interfaces import CollectionPreview, LibraryStats
from infrastructure.library_store import LibraryStore


class HomeVM:
    """Landing view-model; everything is recomputed from storage on `load`."""

    def __init__(self, store: LibraryStore) -> None:
        self._store = store
        self.stats = LibraryStats(photos=0, tags=0, collections=0)
        self.previews: list[CollectionPreview] = []

    async def load(self) -> None:
        try:
            self.stats = await self._store.library_stats()
            self.previews = await self._store.collections_preview()
        except LibraryError as ex:
            logger.error("Load stats failed: {}", ex)
