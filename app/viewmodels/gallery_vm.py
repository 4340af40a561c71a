"""ViewModel for the gallery: browsing, filtering, bulk delete and import."""

from __future__ import annotations

from loguru import logger

from app.viewmodels.import_vm import ImportVM
from app.viewmodels.messages import pluralize, report_failure
from core.errors import LibraryError, PermissionDeniedError
from core.models import ALL_TAG, GALLERY_FILTER_TAGS, MediaItem
from core.services.filter_service import available_tags, filter_media
from core.services.interfaces import MediaPicker, Notifier
from core.services.selection_service import SelectionService
from infrastructure.library_store import LibraryStore


class GalleryVM:
    """Gallery view-model.

    Holds the last loaded library, the active tag/search filters and the
    selection state. The store is reloaded after every mutation.
    """

    filter_tags = GALLERY_FILTER_TAGS

    def __init__(
        self, store: LibraryStore, notifier: Notifier, picker: MediaPicker | None = None
    ) -> None:
        """Create a GalleryVM.

        Args:
            store: Library store to read from and write to.
            notifier: Surface for success/failure messages.
            picker: Device picker used by `start_import`.
        """
        self._store = store
        self._notifier = notifier
        self._picker = picker
        self.media: list[MediaItem] = []
        self.available_tags: list[str] = [ALL_TAG]
        self.search_text = ""
        self.selected_tag = ALL_TAG
        self.selection = SelectionService()

    async def load(self) -> None:
        """Reload the library; on failure keep the previous list and notify."""
        try:
            self.media = await self._store.load_media()
        except LibraryError as ex:
            logger.error("Load media failed: {}", ex)
            report_failure(self._notifier, ex, "Failed to load media.")
            return
        self.available_tags = available_tags(self.media)

    @property
    def filtered(self) -> list[MediaItem]:
        return filter_media(self.media, self.selected_tag, self.search_text)

    def select_tag(self, tag: str) -> None:
        self.selected_tag = tag

    def set_search_text(self, text: str) -> None:
        self.search_text = text

    def press(self, item: MediaItem) -> MediaItem | None:
        """Handle a tap; returns the item to open when not selecting."""
        if self.selection.tap(item.id):
            return None
        return item

    def long_press(self, item: MediaItem) -> None:
        self.selection.long_press(item.id)

    def cancel_selection(self) -> None:
        self.selection.cancel()

    @property
    def delete_prompt(self) -> tuple[str, str]:
        return (
            "Delete Photos",
            f"Are you sure you want to delete {pluralize(self.selection.count, 'photo')} "
            "permanently?",
        )

    async def delete_selected(self) -> int:
        """Delete the selected items and return to browsing."""
        count = self.selection.count
        try:
            removed = await self.selection.run_bulk_action(self._store.delete_media)
        except LibraryError as ex:
            report_failure(self._notifier, ex, "Failed to delete photos.")
            return 0
        await self.load()
        self._notifier.notify("Success", f"{pluralize(count, 'photo')} deleted!")
        return removed

    async def start_import(self) -> ImportVM | None:
        """Pick photos/videos and open a tagging session for them."""
        if self._picker is None:
            return None
        try:
            assets = await self._picker.pick(allow_video=True)
        except PermissionDeniedError:
            self._notifier.notify(
                "Permission Required", "Please grant camera roll access to import media."
            )
            return None
        if not assets:
            return None
        return ImportVM(self._store, self._notifier, assets, on_finished=self.load)
