"""ViewModel for one collection: category filter, removal and additions."""

from __future__ import annotations

from app.viewmodels.messages import pluralize, report_failure
from core.errors import LibraryError, NotFoundError, PermissionDeniedError
from core.models import ALL_TAG, GALLERY_FILTER_TAGS, Collection, MediaItem
from core.services.filter_service import filter_media
from core.services.interfaces import MediaPicker, Notifier
from core.services.selection_service import SelectionService
from infrastructure.library_store import LibraryStore


class CollectionDetailVM:
    """Detail view-model for a single collection.

    `collection` is replaced with the stored record after every successful
    mutation. A `NotFoundError` means the collection was deleted elsewhere;
    `is_gone` is then set so the view can close.
    """

    filter_tags = GALLERY_FILTER_TAGS

    def __init__(
        self,
        store: LibraryStore,
        notifier: Notifier,
        collection: Collection,
        picker: MediaPicker | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._picker = picker
        self.collection = collection
        self.selected_category = ALL_TAG
        self.selection = SelectionService()
        self.is_gone = False

    @property
    def photos(self) -> list[MediaItem]:
        return filter_media(self.collection.photos, self.selected_category)

    def select_category(self, tag: str) -> None:
        self.selected_category = tag

    def press(self, photo: MediaItem) -> MediaItem | None:
        if self.selection.tap(photo.id):
            return None
        return photo

    def long_press(self, photo: MediaItem) -> None:
        self.selection.long_press(photo.id)

    def cancel_selection(self) -> None:
        self.selection.cancel()

    @property
    def remove_prompt(self) -> tuple[str, str]:
        return (
            "Delete Photos",
            f"Are you sure you want to remove {pluralize(self.selection.count, 'photo')} "
            "from this collection?",
        )

    def _handle_failure(self, ex: LibraryError, message: str) -> None:
        if isinstance(ex, NotFoundError):
            self.is_gone = True
        report_failure(self._notifier, ex, message)

    async def remove_selected(self) -> bool:
        """Remove the selected photos from this collection only."""

        async def remove(ids: set[str]) -> Collection:
            return await self._store.remove_photos_from_collection(self.collection.id, ids)

        try:
            self.collection = await self.selection.run_bulk_action(remove)
        except LibraryError as ex:
            self._handle_failure(ex, "Failed to delete photos.")
            return False
        return True

    async def add_photos(self, photos: list[MediaItem]) -> bool:
        """Add library photos picked in the "add from gallery" flow."""
        if not photos:
            self._notifier.notify("No Photos", "Please select at least one photo.")
            return False
        try:
            self.collection = await self._store.add_photos_to_collection(
                self.collection.id, photos
            )
        except LibraryError as ex:
            self._handle_failure(ex, "Failed to add photos to collection.")
            return False
        self._notifier.notify("Success", f"{len(photos)} photo(s) added to collection!")
        return True

    async def add_from_device(self) -> bool:
        """Pick device images and add them as untagged snapshots."""
        if self._picker is None:
            return False
        try:
            assets = await self._picker.pick(allow_video=False)
        except PermissionDeniedError:
            self._notifier.notify("Permission Required", "Please grant camera roll access.")
            return False
        if not assets:
            return False
        return await self.add_photos(self._store.new_items(assets))
