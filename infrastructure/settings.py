"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

DEFAULT_HOME = Path.home() / ".frameflow"


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


def _expand(value: str | None, fallback: Path) -> Path:
    if not value:
        return fallback
    return Path(value).expanduser()


@dataclass
class LibrarySettings:
    """Typed view over the settings consumed when building the library."""

    storage_dir: Path
    media_key: str = "media"
    collections_key: str = "collections"
    allow_empty_on_create: bool = False
    log_dir: Path = DEFAULT_HOME / "logs"
    log_level: str = "INFO"

    @classmethod
    def from_json(cls, settings: JsonSettings) -> LibrarySettings:
        return cls(
            storage_dir=_expand(settings.get("storage.directory"), DEFAULT_HOME / "storage"),
            media_key=str(settings.get("storage.keys.media", "media")),
            collections_key=str(settings.get("storage.keys.collections", "collections")),
            allow_empty_on_create=bool(settings.get("collections.allow_empty_on_create", False)),
            log_dir=_expand(settings.get("logging.directory"), DEFAULT_HOME / "logs"),
            log_level=str(settings.get("logging.level", "INFO")).upper(),
        )
