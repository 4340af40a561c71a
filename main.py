from __future__ import annotations

import asyncio
from pathlib import Path

from loguru import logger

from app.viewmodels.home_vm import HomeVM
from infrastructure.kv_backends import JsonFileBackend
from infrastructure.library_store import LibraryStore, StorageKeys
from infrastructure.logging import find_latest_log_file, init_logging
from infrastructure.settings import JsonSettings, LibrarySettings

BASE_DIR = Path(__file__).parent


def build_store(cfg: LibrarySettings) -> LibraryStore:
    """Wire a LibraryStore onto the file backend described by `cfg`."""
    return LibraryStore(
        JsonFileBackend(cfg.storage_dir),
        keys=StorageKeys(media=cfg.media_key, collections=cfg.collections_key),
        allow_empty_on_create=cfg.allow_empty_on_create,
    )


async def _summarize(store: LibraryStore) -> None:
    home = HomeVM(store)
    await home.load()
    logger.info(
        "Library: {} photos, {} tags, {} collections",
        home.stats.photos,
        home.stats.tags,
        home.stats.collections,
    )
    for preview in home.previews:
        logger.info(
            "Preview {}: {} item(s), cover {}", preview.name, preview.count, preview.cover_uri
        )


def main(settings_path: str | Path | None = None) -> int:
    settings = JsonSettings(settings_path or BASE_DIR / "settings.json")
    cfg = LibrarySettings.from_json(settings)
    init_logging(cfg.log_dir, cfg.log_level)
    logger.info("Log file: {}", find_latest_log_file(cfg.log_dir))

    store = build_store(cfg)
    logger.info("Storage directory: {}", cfg.storage_dir)
    asyncio.run(_summarize(store))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
