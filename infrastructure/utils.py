"""Utilities for id generation and ISO-8601 timestamp handling.

Stored timestamps use the JavaScript `toISOString()` shape
(`YYYY-MM-DDTHH:MM:SS.mmmZ`, always UTC) so records written by other
clients of the same store remain readable.
"""

from __future__ import annotations

from datetime import datetime, timezone
import uuid

ISO_DT_FMT = "%Y-%m-%dT%H:%M:%S"


def new_id() -> str:
    """Return a fresh opaque record id."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_iso_datetime(dt: datetime) -> str:
    """Format `dt` as UTC with millisecond precision and a `Z` suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return f"{dt.strftime(ISO_DT_FMT)}.{dt.microsecond // 1000:03d}Z"


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Raises:
        ValueError: The value is not an ISO-8601 timestamp.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
