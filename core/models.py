"""Core domain models for media items and collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

ALL_TAG = "All"
OTHER_GROUP = "Other"

PRESET_TAGS = [
    "Bride",
    "Groom",
    "Couple",
    "Family",
    "Kids",
    "Wedding",
    "Portrait",
    "Male",
    "Female",
]

GALLERY_FILTER_TAGS = [
    ALL_TAG,
    "Portrait",
    "Wedding",
    "Couple",
    "Bride",
    "Groom",
    "Family",
    "Kids",
    "Male",
    "Female",
]


class MediaType(str, Enum):
    """Kind of resource a media item points at."""

    IMAGE = "image"
    VIDEO = "video"


@dataclass
class NewMediaItem:
    """Caller-supplied fields for an item that has not been stored yet."""

    uri: str
    type: MediaType = MediaType.IMAGE
    tags: list[str] = field(default_factory=list)
    category: str | None = None


@dataclass
class MediaItem:
    """A single imported photo or video reference."""

    id: str
    uri: str
    created_at: datetime
    type: MediaType = MediaType.IMAGE
    tags: list[str] = field(default_factory=list)
    category: str | None = None

    @property
    def is_video(self) -> bool:
        return self.type is MediaType.VIDEO


@dataclass
class Collection:
    """A named group of media snapshots.

    `photos` holds copies taken when they were added; later edits to the
    library never reach them.
    """

    id: str
    name: str
    created_at: datetime
    photos: list[MediaItem] = field(default_factory=list)
