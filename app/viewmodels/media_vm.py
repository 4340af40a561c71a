"""View models around a single `MediaItem`."""

from __future__ import annotations

from dataclasses import dataclass

from app.viewmodels.messages import report_failure
from core.errors import LibraryError
from core.models import MediaItem
from core.services.interfaces import Notifier
from infrastructure.library_store import LibraryStore


@dataclass
class MediaVM:
    """Expose convenient properties for bindings/templates."""

    record: MediaItem

    @property
    def file_name(self) -> str:
        """Last path segment of the URI."""
        return self.record.uri.rstrip("/").rsplit("/", 1)[-1]

    @property
    def is_video(self) -> bool:
        return self.record.is_video

    @property
    def tags_label(self) -> str:
        """Comma-separated tags, or an empty string when untagged."""
        return ", ".join(self.record.tags)

    @property
    def category(self) -> str:
        return self.record.category or ""


class MediaDetailVM:
    """Full-screen view of one item with an optional "add to gallery" action."""

    def __init__(
        self,
        store: LibraryStore,
        notifier: Notifier,
        media: MediaItem,
        show_add_button: bool = False,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self.media = MediaVM(media)
        self.show_add_button = show_add_button
        self.show_tags = False

    def toggle_tags(self) -> None:
        self.show_tags = not self.show_tags

    async def add_to_gallery(self) -> bool:
        """Copy the item into the library unless its URI is already there."""
        try:
            added = await self._store.add_to_gallery(self.media.record)
        except LibraryError as ex:
            report_failure(self._notifier, ex, "Failed to add photo to gallery.")
            return False
        if added is None:
            self._notifier.notify("Already Added", "This photo is already in your gallery.")
            return False
        self._notifier.notify("Success", "Photo added to your gallery!")
        return True
