"""
Celery tasks for the activity app.

Every ``record`` call already prunes the writer's history, but concurrent
writers for one user can overshoot the cap briefly.  The nightly sweep
below brings every user back under ``ACTIVITY_RETENTION_LIMIT``.
"""
import logging

from celery import shared_task
from django.contrib.auth import get_user_model
from django.db.models import Count

from .models import ActivityEntry
from .services import activity_recorder, retention_limit

logger = logging.getLogger(__name__)

User = get_user_model()


@shared_task
def prune_activity_history() -> dict:
    """Prune every user whose history exceeds the retention limit."""
    limit = retention_limit()
    over_limit = (
        ActivityEntry.objects.values("user_id")
        .annotate(n=Count("id"))
        .filter(n__gt=limit)
        .values_list("user_id", flat=True)
    )

    users = 0
    deleted = 0
    for user in User.objects.filter(pk__in=list(over_limit)).only("id").iterator(chunk_size=200):
        deleted += activity_recorder.prune(user, limit=limit)
        users += 1

    logger.info("Activity retention sweep: %s entries removed for %s users", deleted, users)
    return {"users": users, "deleted": deleted, "limit": limit}
