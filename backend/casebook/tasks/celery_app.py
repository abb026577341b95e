"""Celery application configuration and beat schedule."""

from celery import Celery
from celery.schedules import crontab

from casebook.config import get_settings

settings = get_settings()

celery_app = Celery(
    "casebook",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "casebook.tasks.alert_tasks",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="US/Central",
    task_track_started=True,
    task_time_limit=600,
    task_soft_time_limit=540,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)

celery_app.conf.beat_schedule = {
    "scan-level-up-eligibility": {
        "task": "casebook.tasks.alert_tasks.scan_level_up_eligibility",
        "schedule": crontab(minute=0, hour="*/2"),
    },
    "scan-behavior-completions": {
        "task": "casebook.tasks.alert_tasks.scan_behavior_completions",
        "schedule": crontab(minute=15, hour="*/2"),
    },
    "scan-low-daily-points": {
        "task": "casebook.tasks.alert_tasks.scan_low_daily_points",
        "schedule": crontab(minute=0, hour=6),
    },
    "scan-overdue-follow-ups": {
        "task": "casebook.tasks.alert_tasks.scan_overdue_follow_ups",
        "schedule": crontab(minute=30, hour=7),
    },
}
