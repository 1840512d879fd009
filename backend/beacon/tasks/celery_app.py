"""Celery application for background preference learning."""

from celery import Celery
from celery.schedules import crontab

from beacon.config import get_settings

settings = get_settings()

celery_app = Celery(
    "beacon",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["beacon.tasks.preference_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    # Learning results are summaries nobody polls for long
    result_expires=6 * 3600,
    # A batch run covers every recently active user, pauses included
    task_time_limit=1800,
    task_soft_time_limit=1700,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)

celery_app.conf.beat_schedule = {
    "learn-active-user-preferences": {
        "task": "beacon.tasks.preference_tasks.learn_active_users",
        "schedule": crontab(minute=15),
        # Drop a run still queued when the next one is due
        "options": {"expires": 3300},
    },
}
