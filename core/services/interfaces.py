"""Core service interfaces and shared data structures.

This module defines the protocols for the collaborators the library layer
talks to (key-value backend, device picker, notification surface) and the
small dataclasses returned by read-only projections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from core.models import MediaItem, MediaType


class KeyValueBackend(Protocol):
    """Durable string store keyed by fixed names.

    Implementations signal failure by raising `OSError`.
    """

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key was never written."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Replace the value stored under `key`."""
        ...


@dataclass
class PickedAsset:
    """One selection returned by the device media picker."""

    uri: str
    type: MediaType | None = None


class MediaPicker(Protocol):
    """Device media library picker."""

    async def pick(self, allow_video: bool = True) -> list[PickedAsset] | None:
        """Return picked assets, or None when the user cancelled.

        Raises:
            PermissionDeniedError: Access to the media library was refused.
        """
        ...


class Notifier(Protocol):
    """Surface used to report success/failure to the user."""

    def notify(self, title: str, message: str) -> None:
        """Show a message with a title."""
        ...


@dataclass
class LibraryStats:
    """Counters shown on the landing view.

    Attributes:
        photos: Number of stored media items.
        tags: Number of distinct tags across all items.
        collections: Number of stored collections.
    """

    photos: int
    tags: int
    collections: int


@dataclass
class CollectionPreview:
    """Derived group of library items sharing the same first tag.

    Attributes:
        name: First tag of the grouped items, or "Other".
        count: Number of items in the group.
        cover_uri: URI of the first item in the group.
        first_item: The first item in the group.
    """

    name: str
    count: int
    cover_uri: str
    first_item: MediaItem
