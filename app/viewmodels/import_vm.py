"""ViewModel for tagging freshly picked media before it enters the library."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from loguru import logger

from app.viewmodels.messages import report_failure
from core.errors import LibraryError
from core.models import PRESET_TAGS, MediaItem, MediaType, NewMediaItem
from core.services.filter_service import toggle_tag
from core.services.interfaces import Notifier, PickedAsset
from infrastructure.library_store import LibraryStore


class ImportVM:
    """Walk picked assets one at a time, or import them all with shared tags.

    Each saved photo is persisted immediately, so leaving the session early
    keeps what was already saved.
    """

    preset_tags = PRESET_TAGS

    def __init__(
        self,
        store: LibraryStore,
        notifier: Notifier,
        assets: list[PickedAsset],
        on_finished: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._on_finished = on_finished
        self.assets = list(assets)
        self.index = 0
        self.tags: list[str] = []
        self.saved: list[MediaItem] = []

    @property
    def current(self) -> PickedAsset | None:
        if self.index < len(self.assets):
            return self.assets[self.index]
        return None

    @property
    def is_finished(self) -> bool:
        return self.current is None

    def toggle_tag(self, tag: str) -> None:
        self.tags = toggle_tag(self.tags, tag)

    async def _advance(self, announce: bool) -> None:
        self.index += 1
        self.tags = []
        if not self.is_finished:
            return
        if self._on_finished is not None:
            await self._on_finished()
        if announce:
            self._notifier.notify("Success", f"{len(self.assets)} photo(s) imported!")

    async def save_current(self) -> MediaItem | None:
        """Store the current asset with the chosen tags and move on.

        On failure the session stays on the same asset so the user can retry.
        """
        asset = self.current
        if asset is None:
            return None
        new = NewMediaItem(uri=asset.uri, type=asset.type or MediaType.IMAGE, tags=self.tags)
        try:
            (created,) = await self._store.add_media([new])
        except LibraryError as ex:
            logger.error("Save photo failed for {}: {}", asset.uri, ex)
            report_failure(self._notifier, ex, "Failed to save photo.")
            return None
        self.saved.append(created)
        await self._advance(announce=True)
        return created

    async def skip_current(self) -> None:
        if self.current is not None:
            await self._advance(announce=False)

    async def import_all(self) -> list[MediaItem]:
        """Store every remaining asset with the currently chosen tags."""
        if not self.tags:
            self._notifier.notify("Tags Required", "Please select at least one tag.")
            return []
        remaining = self.assets[self.index :]
        news = [
            NewMediaItem(uri=a.uri, type=a.type or MediaType.IMAGE, tags=list(self.tags))
            for a in remaining
        ]
        try:
            created = await self._store.add_media(news)
        except LibraryError as ex:
            report_failure(self._notifier, ex, "Failed to save media.")
            return []
        self.saved.extend(created)
        self.index = len(self.assets)
        self.tags = []
        if self._on_finished is not None:
            await self._on_finished()
        return created
