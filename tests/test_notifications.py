"""Tests for the file notification sink."""

from pathlib import Path

import pytest

from medagenda.services.notification_service import FileNotificationSink


@pytest.mark.asyncio
async def test_notification_is_written_to_file(tmp_path: Path) -> None:
    """Each notification becomes one text file named after the recipient."""
    directory = tmp_path / "emails"
    sink = FileNotificationSink(directory)

    delivered = await sink.notify("carla.mendes@example.com", "Appointment conflict", "Hello")

    assert delivered is True
    files = list(directory.iterdir())
    assert len(files) == 1
    assert files[0].name.endswith("_carla_mendes@example_com.txt")

    content = files[0].read_text(encoding="utf-8")
    assert "To: carla.mendes@example.com" in content
    assert "Subject: Appointment conflict" in content
    assert "--- MESSAGE ---\nHello\n" in content


@pytest.mark.asyncio
async def test_notifications_do_not_overwrite_each_other(tmp_path: Path) -> None:
    """Repeated notifications to the same recipient are kept apart."""
    sink = FileNotificationSink(tmp_path)

    await sink.notify("a@example.com", "First", "one")
    await sink.notify("a@example.com", "Second", "two")

    assert len(list(tmp_path.glob("*_a@example_com.txt"))) == 2


@pytest.mark.asyncio
async def test_unwritable_directory_raises(tmp_path: Path) -> None:
    """Write failures propagate to the caller."""
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    sink = FileNotificationSink(blocker / "emails")

    with pytest.raises(OSError):
        await sink.notify("a@example.com", "Subject", "Body")
