# activity/services.py
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import Count
from django.db.models.functions import TruncDate
from django.utils import timezone

from common.choices import coerce_choice

from .kinds import ActivityKind, humanize
from .models import ActivityEntry

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_LIMIT = 1000


def retention_limit() -> int:
    return int(getattr(settings, "ACTIVITY_RETENTION_LIMIT", DEFAULT_RETENTION_LIMIT))


# Geo headers set by the edge proxy (Cloudflare visitor location headers).
CITY_HEADER = "HTTP_CF_IPCITY"
COUNTRY_HEADER = "HTTP_CF_IPCOUNTRY"


def request_context(request) -> dict:
    """Pull the client ip, user agent and edge geo headers out of a Django (or DRF) request."""
    if request is None:
        return {}
    meta = getattr(request, "META", {}) or {}
    forwarded = meta.get("HTTP_X_FORWARDED_FOR", "")
    ip = forwarded.split(",")[0].strip() if forwarded else meta.get("REMOTE_ADDR")
    return {
        "ip_address": ip or None,
        "user_agent": (meta.get("HTTP_USER_AGENT") or "")[:255],
        "city": (meta.get(CITY_HEADER) or "").strip()[:100],
        "country": (meta.get(COUNTRY_HEADER) or "").strip()[:100],
    }


class ActivityRecorder:
    """
    Append-only audit log of user actions with bounded per-user retention.

    ``record`` raises ``ValidationError`` for bad input; callers that must
    not be interrupted by activity tracking use ``track`` instead.
    """

    def record(
        self,
        user,
        kind,
        description: Optional[str] = None,
        trackable=None,
        metadata: Optional[dict] = None,
        request=None,
    ) -> ActivityEntry:
        if user is None or getattr(user, "pk", None) is None:
            raise ValidationError({"user": "An existing user is required."})
        kind = coerce_choice(ActivityKind, kind)
        if description is None:
            description = humanize(kind)

        entry = ActivityEntry(
            user=user,
            kind=kind,
            description=description,
            metadata=metadata or {},
            **request_context(request),
        )
        if trackable is not None:
            entry.trackable_content_type = ContentType.objects.get_for_model(trackable)
            entry.trackable_object_id = trackable.pk
        entry.full_clean()

        with transaction.atomic():
            entry.save()
            self.prune(user)
        return entry

    def track(self, user, kind, description=None, trackable=None, metadata=None, request=None):
        """Fire-and-forget ``record``: failures are logged, never raised."""
        try:
            return self.record(
                user, kind, description, trackable=trackable, metadata=metadata, request=request
            )
        except ValidationError as exc:
            logger.warning("Activity %r for user %s not recorded: %s", kind, getattr(user, "pk", None), exc)
        except DatabaseError as exc:
            logger.error("Activity %r for user %s failed to save: %s", kind, getattr(user, "pk", None), exc)
        return None

    def prune(self, user, limit: Optional[int] = None) -> int:
        """
        Delete the user's entries beyond the newest ``limit`` rows.

        Issued as a single DELETE with an ordered, offset subquery so
        concurrent writers never see a half-applied prune.
        """
        limit = retention_limit() if limit is None else limit
        stale = (
            ActivityEntry.objects.for_user(user)
            .recent()
            .values("pk")[limit:]
        )
        deleted, _ = ActivityEntry.objects.filter(pk__in=stale).delete()
        if deleted:
            logger.debug("Pruned %s activity entries for user %s", deleted, user.pk)
        return deleted

    # ---------- queries ----------
    def timeline(self, user, limit: int = 20):
        return (
            ActivityEntry.objects.for_user(user)
            .select_related("trackable_content_type")
            .prefetch_related("trackable")
            .recent()[:limit]
        )

    def summary(self, user, period: timedelta = timedelta(weeks=1), now=None) -> dict:
        now = now or timezone.now()
        entries = ActivityEntry.objects.for_user(user).filter(
            created_at__gte=now - period, created_at__lte=now
        )
        by_day = (
            entries.annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(n=Count("id"))
            .order_by("-n", "-day")
        )
        busiest = by_day.first()
        by_kind = {
            ActivityKind(row["kind"]).label: row["n"]
            for row in entries.values("kind").annotate(n=Count("id")).order_by("kind")
        }
        return {
            "total_activities": entries.count(),
            "sign_ins": entries.by_kind(ActivityKind.SIGN_IN).count(),
            "profile_updates": entries.by_kind(ActivityKind.PROFILE_UPDATED).count(),
            "social_interactions": entries.social().count(),
            "most_active_day": busiest["day"] if busiest else None,
            "activity_types": by_kind,
        }

    def most_active_users(self, limit: int = 10, since=None) -> list:
        qs = ActivityEntry.objects.all()
        if since is not None:
            qs = qs.since(since)
        rows = (
            qs.values("user__username")
            .annotate(n=Count("id"))
            .order_by("-n", "user__username")[:limit]
        )
        return [{"username": r["user__username"], "count": r["n"]} for r in rows]

    def analytics(self, now=None) -> dict:
        now = now or timezone.now()
        month_ago = now - timedelta(days=30)
        recent = ActivityEntry.objects.since(month_ago)
        this_month = recent.count()
        by_day = {
            row["day"].isoformat(): row["n"]
            for row in recent.annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(n=Count("id"))
            .order_by("day")
        }
        by_kind = {
            ActivityKind(row["kind"]).label: row["n"]
            for row in ActivityEntry.objects.values("kind").annotate(n=Count("id")).order_by("kind")
        }
        return {
            "total_activities": ActivityEntry.objects.count(),
            "this_month": this_month,
            "daily_average": round(this_month / 30.0, 2),
            "by_type": by_kind,
            "by_day": by_day,
            "top_users": self.most_active_users(limit=10, since=month_ago),
        }


activity_recorder = ActivityRecorder()
