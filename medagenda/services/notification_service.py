"""Notification service for informing patients about their appointments.

There is no mail server behind this service: each "e-mail" is written as a
plain-text file into the configured notification directory.
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)


class NotificationSink(Protocol):
    """Fire-and-forget side channel towards a recipient."""

    async def notify(self, recipient: str, subject: str, body: str) -> bool: ...


class FileNotificationSink:
    """Writes each notification as a text file named after its recipient."""

    def __init__(self, directory: str | Path):
        """Initialize sink with the output directory."""
        self.directory = Path(directory)

    @staticmethod
    def _safe_recipient(recipient: str) -> str:
        return recipient.replace(".", "_").replace("/", "_")

    def _write(self, recipient: str, subject: str, body: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)

        now = datetime.now()
        path = self.directory / f"{now:%Y%m%d_%H%M%S%f}_{self._safe_recipient(recipient)}.txt"
        content = (
            f"Date: {now:%d/%m/%Y %H:%M:%S}\n"
            f"To: {recipient}\n"
            f"Subject: {subject}\n"
            "\n"
            "--- MESSAGE ---\n"
            f"{body}\n"
        )
        path.write_text(content, encoding="utf-8")
        return path

    async def notify(self, recipient: str, subject: str, body: str) -> bool:
        """
        Write a notification file.

        Args:
            recipient: Recipient address
            subject: Notification subject
            body: Notification body

        Returns:
            True once the file is written

        Raises:
            OSError: If the file cannot be written
        """
        try:
            path = await asyncio.to_thread(self._write, recipient, subject, body)
        except OSError as e:
            logger.error("notification_write_failed", recipient=recipient, error=str(e))
            raise

        logger.info("notification_written", recipient=recipient, subject=subject, path=str(path))
        return True
