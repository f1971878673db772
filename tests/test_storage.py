"""Attachment storage and release task tests."""

import logging
from pathlib import Path
from unittest.mock import patch

from carhub.services.storage import AttachmentStorage
from carhub.tasks.attachments import schedule_release


def test_store_writes_file_with_random_name(tmp_path):
    """Test stored files land in the upload dir and keep their extension."""
    storage = AttachmentStorage(tmp_path / "uploads")
    first = storage.store(b"one", "front.JPG")
    second = storage.store(b"two", "front.JPG")

    assert first != second
    assert first.endswith(".jpg")
    assert Path(first).parent == tmp_path / "uploads"
    assert Path(first).read_bytes() == b"one"
    assert Path(second).read_bytes() == b"two"


def test_store_without_filename(tmp_path):
    """Test a nameless upload is stored without a suffix."""
    storage = AttachmentStorage(tmp_path)
    locator = storage.store(b"data")
    assert Path(locator).suffix == ""
    assert Path(locator).exists()


def test_release_removes_file(tmp_path):
    """Test release deletes the stored file."""
    storage = AttachmentStorage(tmp_path)
    locator = storage.store(b"data", "car.png")

    assert storage.release(locator) is True
    assert not Path(locator).exists()


def test_release_missing_file_is_logged_not_raised(tmp_path, caplog):
    """Test releasing an already-gone file only logs a warning."""
    storage = AttachmentStorage(tmp_path)
    missing = (tmp_path / "gone.png").as_posix()

    with caplog.at_level(logging.WARNING, logger="carhub.services.storage"):
        assert storage.release(missing) is False
    assert "Failed to delete attachment" in caplog.text


def test_release_outside_upload_dir_refused(tmp_path):
    """Test locators pointing outside the upload dir are left alone."""
    outside = tmp_path / "outside.txt"
    outside.write_text("keep me")
    storage = AttachmentStorage(tmp_path / "uploads")

    assert storage.release(outside.as_posix()) is False
    assert outside.exists()


def test_schedule_release_survives_enqueue_failure(caplog):
    """Test a broker failure for one locator does not stop the others."""
    with patch("carhub.tasks.attachments.release_attachment.delay") as mock_delay:
        mock_delay.side_effect = [ConnectionError("broker down"), None]
        with caplog.at_level(logging.WARNING, logger="carhub.tasks.attachments"):
            schedule_release(["uploads/a.png", "uploads/b.png"])

    assert mock_delay.call_count == 2
    assert "Could not schedule release of uploads/a.png" in caplog.text
