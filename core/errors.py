"""Error taxonomy shared by the store and the view models."""

from __future__ import annotations


class LibraryError(Exception):
    """Base class for every failure reported by the library layer."""


class StorageReadError(LibraryError):
    """Backend `get` failed, or the stored value is not the expected shape."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to read '{key}': {reason}")
        self.key = key
        self.reason = reason


class StorageWriteError(LibraryError):
    """Backend `set` failed; the mutation must be treated as not committed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to write '{key}': {reason}")
        self.key = key
        self.reason = reason


class ValidationError(LibraryError):
    """Input rejected before any I/O took place."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title
        self.message = message


class NotFoundError(LibraryError):
    """A referenced collection no longer exists."""

    def __init__(self, kind: str, item_id: str) -> None:
        super().__init__(f"{kind} not found: {item_id}")
        self.kind = kind
        self.item_id = item_id


class PermissionDeniedError(LibraryError):
    """The device media picker refused access."""
