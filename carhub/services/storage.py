"""Local file storage for car images."""

import logging
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from carhub.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class AttachmentUpload:
    """An uploaded file read into memory."""

    filename: str | None
    data: bytes


class AttachmentStorage:
    """Store uploaded images on disk and release them on deletion.

    Locators are the stored file paths. Release is best effort: failures are
    logged and never raised.
    """

    def __init__(self, upload_dir: str | Path):
        self.upload_dir = Path(upload_dir)

    def store(self, data: bytes, filename: str | None = None) -> str:
        """Write ``data`` under a fresh random name and return its locator."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = Path(filename).suffix.lower() if filename else ""
        path = self.upload_dir / f"{uuid.uuid4().hex}{suffix}"
        path.write_bytes(data)
        logger.debug(f"Stored attachment {path} ({len(data)} bytes)")
        return path.as_posix()

    def release(self, locator: str) -> bool:
        """Remove the file behind ``locator``. Returns True if it was removed."""
        path = Path(locator)
        try:
            resolved = path.resolve()
            if not resolved.is_relative_to(self.upload_dir.resolve()):
                logger.warning(f"Refusing to delete attachment outside upload dir: {locator}")
                return False
            resolved.unlink()
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to delete attachment {locator}: {e}")
            return False
        logger.debug(f"Released attachment {locator}")
        return True


@lru_cache
def get_attachment_storage() -> AttachmentStorage:
    """Get the storage rooted at the configured upload directory."""
    return AttachmentStorage(get_settings().upload_dir)
