from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from core.errors import PermissionDeniedError
from core.models import MediaItem, MediaType, NewMediaItem
from core.services.interfaces import PickedAsset
from infrastructure.kv_backends import InMemoryBackend
from infrastructure.library_store import LibraryStore

BASE_TIME = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


class FlakyBackend(InMemoryBackend):
    """In-memory backend whose reads/writes can be switched to fail."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("disk unavailable")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.writes += 1
        await super().set(key, value)


class TickingClock:
    """Returns BASE_TIME, then one second later on every call."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> datetime:
        now = BASE_TIME + timedelta(seconds=self.calls)
        self.calls += 1
        return now


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.messages.append((title, message))

    @property
    def titles(self) -> list[str]:
        return [t for t, _ in self.messages]


class FakePicker:
    def __init__(self, assets: list[PickedAsset] | None = None, denied: bool = False) -> None:
        self.assets = assets
        self.denied = denied
        self.calls: list[bool] = []

    async def pick(self, allow_video: bool = True) -> list[PickedAsset] | None:
        self.calls.append(allow_video)
        if self.denied:
            raise PermissionDeniedError("media library access refused")
        return self.assets


@pytest.fixture()
def backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def store(backend: FlakyBackend, clock: TickingClock) -> LibraryStore:
    return LibraryStore(backend, clock=clock)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def new(uri: str, *tags: str, type: MediaType = MediaType.IMAGE) -> NewMediaItem:
    return NewMediaItem(uri=uri, type=type, tags=list(tags))


def item(item_id: str, *tags: str, uri: str | None = None) -> MediaItem:
    return MediaItem(
        id=item_id, uri=uri or f"file:///{item_id}.jpg", created_at=BASE_TIME, tags=list(tags)
    )
