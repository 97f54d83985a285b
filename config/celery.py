"""Celery configuration for OneDesigner."""
import os

from celery import Celery
from celery.schedules import crontab

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.development")

app = Celery("onedesigner")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# ── Named queues ────────────────────────────────────────
app.conf.task_routes = {
    "apps.matching.tasks.auto_match_*": {"queue": "ai"},
    "apps.matching.tasks.expire_*": {"queue": "default"},
    "apps.notifications.tasks.*": {"queue": "notifications"},
}

# ── Beat schedule (periodic tasks) ─────────────────────
app.conf.beat_schedule = {
    # Expire pending matches older than MATCH_EXPIRY_DAYS, daily 03:00 UTC
    "expire-stale-matches": {
        "task": "apps.matching.tasks.expire_stale_matches",
        "schedule": crontab(hour=3, minute=0),
        "options": {"queue": "default"},
    },
    # Retry undelivered e-mails/webhooks, hourly
    "dispatch-pending-notifications": {
        "task": "apps.notifications.tasks.dispatch_pending_notifications",
        "schedule": crontab(minute=15),
        "options": {"queue": "notifications"},
    },
}
