import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("vehicle_rental")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Stored availability flag vs. active bookings - every hour
    "audit-vehicle-availability": {
        "task": "vehicles.audit_availability",
        "schedule": crontab(minute=0),
        "options": {"expires": 50 * 60},
    },
}
