"""Celery application configuration."""

from celery import Celery

from carhub.config import get_settings

settings = get_settings()

app = Celery(
    "carhub",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["carhub.tasks.attachments"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_ignore_result=True,
    task_time_limit=60,
    task_soft_time_limit=30,
    # Run tasks inline when no broker is deployed (and in tests)
    task_always_eager=settings.celery_task_always_eager,
)
