"""Celery tasks for attachment cleanup."""

import logging

from carhub.celery_app import app as celery_app
from carhub.services.storage import get_attachment_storage

logger = logging.getLogger(__name__)


@celery_app.task(name="tasks.release_attachment")
def release_attachment(locator: str) -> bool:
    """Delete one stored image. Never retried: the car row is already gone."""
    return get_attachment_storage().release(locator)


def schedule_release(locators: list[str]) -> None:
    """Queue one release task per locator, fire-and-forget.

    Enqueue failures are logged and dropped so they can never fail the
    request that deleted the car.
    """
    for locator in locators:
        try:
            release_attachment.delay(locator)
        except Exception as e:
            logger.warning(f"Could not schedule release of {locator}: {e}")
