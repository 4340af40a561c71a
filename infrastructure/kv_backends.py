"""Key-value backends holding the raw JSON strings.

`InMemoryBackend` is process-local and used by tests and previews;
`JsonFileBackend` keeps one file per key under a directory.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger


class InMemoryBackend:
    """Dict-backed backend.

    `latency` yields to the event loop before each read and write so tests
    can interleave overlapping operations.
    """

    def __init__(self, initial: dict[str, str] | None = None, latency: float = 0.0) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._latency = latency

    async def get(self, key: str) -> str | None:
        await asyncio.sleep(self._latency)
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(self._latency)
        self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileBackend:
    """Store each key as `<directory>/<key>.json`.

    Writes go to a temporary sibling first and are moved into place, so a
    failed write leaves the previous value intact.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    def _path_for(self, key: str) -> Path:
        safe = "".join(ch if (ch.isalnum() or ch in "-_.") else "_" for ch in key)
        return self._dir / f"{safe}.json"

    async def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return await f.read()
        except FileNotFoundError:
            return None

    async def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        await aiofiles.os.makedirs(self._dir, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(value)
        await aiofiles.os.replace(tmp_path, path)
        logger.debug("Wrote {} bytes to {}", len(value), os.fspath(path))
