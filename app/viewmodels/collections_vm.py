"""ViewModels for the collections list and the two-step creation flow."""

from __future__ import annotations

from loguru import logger

from app.viewmodels.messages import pluralize, report_failure
from core.errors import LibraryError, PermissionDeniedError, ValidationError
from core.models import Collection, MediaItem
from core.services.interfaces import MediaPicker, Notifier
from core.services.selection_service import SelectionService
from infrastructure.library_store import LibraryStore


class CollectionsVM:
    """Collections list with selection-mode bulk delete."""

    def __init__(self, store: LibraryStore, notifier: Notifier) -> None:
        self._store = store
        self._notifier = notifier
        self.collections: list[Collection] = []
        self.selection = SelectionService()

    async def load(self) -> None:
        try:
            self.collections = await self._store.load_collections()
        except LibraryError as ex:
            logger.error("Load collections failed: {}", ex)
            report_failure(self._notifier, ex, "Failed to load collections.")

    def press(self, collection: Collection) -> Collection | None:
        """Handle a tap; returns the collection to open when not selecting."""
        if self.selection.tap(collection.id):
            return None
        return collection

    def long_press(self, collection: Collection) -> None:
        self.selection.long_press(collection.id)

    def cancel_selection(self) -> None:
        self.selection.cancel()

    @property
    def delete_prompt(self) -> tuple[str, str]:
        return (
            "Delete Collections",
            f"Are you sure you want to delete {pluralize(self.selection.count, 'collection')}? "
            "This will not delete the photos, only the collections.",
        )

    async def delete_selected(self) -> int:
        count = self.selection.count
        try:
            removed = await self.selection.run_bulk_action(self._store.delete_collections)
        except LibraryError as ex:
            report_failure(self._notifier, ex, "Failed to delete collections.")
            return 0
        await self.load()
        self._notifier.notify("Success", f"{pluralize(count, 'collection')} deleted!")
        return removed


class CreateCollectionVM:
    """Name a collection, then pick its photos from the library or the device.

    Photos picked from the device are added as untagged image snapshots; they
    are not imported into the library itself.
    """

    def __init__(
        self, store: LibraryStore, notifier: Notifier, picker: MediaPicker | None = None
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._picker = picker
        self.name = ""
        self.library: list[MediaItem] = []
        self.selected: list[MediaItem] = []

    def confirm_name(self, name: str) -> bool:
        """Validate and keep the trimmed name; notify when it is blank."""
        try:
            self.name = self._store.validate_collection_name(name)
        except ValidationError as ex:
            self._notifier.notify(ex.title, ex.message)
            return False
        return True

    async def load_library(self) -> None:
        try:
            self.library = await self._store.load_media()
        except LibraryError as ex:
            logger.error("Load media failed: {}", ex)
            report_failure(self._notifier, ex, "Failed to load media.")

    def toggle_photo(self, photo: MediaItem) -> None:
        if any(p.id == photo.id for p in self.selected):
            self.selected = [p for p in self.selected if p.id != photo.id]
        else:
            self.selected = [*self.selected, photo]

    async def pick_from_device(self) -> int:
        """Append device photos to the selection; returns how many were added."""
        if self._picker is None:
            return 0
        try:
            assets = await self._picker.pick(allow_video=False)
        except PermissionDeniedError:
            self._notifier.notify("Permission Required", "Please grant camera roll access.")
            return 0
        if not assets:
            return 0
        picked = self._store.new_items(assets)
        self.selected = [*self.selected, *picked]
        return len(picked)

    async def create(self) -> Collection | None:
        try:
            collection = await self._store.create_collection(self.name, self.selected)
        except LibraryError as ex:
            report_failure(self._notifier, ex, "Failed to create collection.")
            return None
        self._notifier.notify("Success", f'Collection "{collection.name}" created!')
        return collection
