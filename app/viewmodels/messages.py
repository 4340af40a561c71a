"""User-facing message helpers shared by the view models."""

from __future__ import annotations

from core.errors import LibraryError, ValidationError
from core.services.interfaces import Notifier


def pluralize(count: int, noun: str) -> str:
    """Return e.g. "1 photo" / "3 photos"."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


def report_failure(notifier: Notifier, ex: LibraryError, message: str) -> None:
    """Notify once for a failed action.

    Validation errors carry their own title and message; everything else is
    shown as a generic "Error" with `message`.
    """
    if isinstance(ex, ValidationError):
        notifier.notify(ex.title, ex.message)
    else:
        notifier.notify("Error", message)
