"""Notification surface that records user-facing messages in the log."""

from __future__ import annotations

from loguru import logger


class LogNotifier:
    """Report messages through loguru; errors are logged at WARNING."""

    def notify(self, title: str, message: str) -> None:
        if title == "Error":
            logger.warning("[{}] {}", title, message)
        else:
            logger.info("[{}] {}", title, message)
