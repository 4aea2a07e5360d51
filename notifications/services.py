# notifications/services.py
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import Count
from django.db.models.functions import TruncDate
from django.utils import timezone

from common.choices import coerce_choice
from realtime.services import ChannelLayerPublisher, channel_key_for
from users.models import wants_notification

from .display import actor_name
from .kinds import PUSH_PRIORITIES, TYPE_GROUPS, NotificationKind, Priority
from .models import Notification
from .push import get_push_dispatcher

logger = logging.getLogger(__name__)

LISTING_FILTERS = ("all", "unread", "read", *TYPE_GROUPS)

DEFAULT_MESSAGE = "You have a new notification."


def generate_content(kind, actor=None, message: Optional[str] = None):
    """Default (title, message) for ``kind``; used by ``notify_user``."""
    kind = NotificationKind(kind)
    who = actor_name(actor)
    if kind == NotificationKind.WELCOME:
        return (
            "Welcome to our platform!",
            "Thank you for joining us. Complete your profile to get started.",
        )
    if kind == NotificationKind.NEW_FOLLOWER:
        return "New Follower", f"{who} started following you."
    if kind == NotificationKind.POST_LIKED:
        return "Post Liked", f"{who} liked your post."
    if kind == NotificationKind.POST_COMMENTED:
        return "New Comment", f"{who} commented on your post."
    if kind == NotificationKind.MENTIONED:
        return "You were mentioned", f"{who} mentioned you in a post."
    if kind == NotificationKind.ROLE_CHANGED:
        return "Role Updated", "Your account role has been updated."
    return kind.label, message or DEFAULT_MESSAGE


class NotificationCenter:
    """
    Creates notifications and keeps track of their read state.

    Creation fans out to the realtime channel and, for high priority
    notifications, to the push dispatcher.  Both fan-outs are best effort:
    a failure there is logged and never undoes the stored notification.
    """

    def __init__(self, publisher=None, dispatcher=None):
        self._publisher = publisher
        self._dispatcher = dispatcher

    @property
    def publisher(self):
        if self._publisher is None:
            self._publisher = ChannelLayerPublisher()
        return self._publisher

    @property
    def dispatcher(self):
        if self._dispatcher is None:
            self._dispatcher = get_push_dispatcher()
        return self._dispatcher

    # ---------- creation ----------
    def notify(
        self,
        recipient,
        kind,
        title: str,
        message: str,
        actor=None,
        subject=None,
        priority=Priority.NORMAL,
        url: str = "",
        metadata: Optional[dict] = None,
    ) -> Notification:
        if recipient is None or getattr(recipient, "pk", None) is None:
            raise ValidationError({"recipient": "An existing user is required."})
        kind = coerce_choice(NotificationKind, kind)
        priority = coerce_choice(Priority, priority, field="priority")

        notification = Notification(
            recipient=recipient,
            actor=actor,
            kind=kind,
            priority=priority,
            title=title or "",
            message=message or "",
            url=url or "",
            metadata=metadata or {},
            read_at=None,
        )
        if subject is not None:
            notification.subject_content_type = ContentType.objects.get_for_model(subject)
            notification.subject_object_id = subject.pk
        notification.full_clean()
        notification.save()

        self._publish(notification)
        if self._should_push(notification):
            self._push(notification)
        return notification

    def safe_notify(self, recipient, kind, title, message, **options):
        """Fire-and-forget ``notify``: failures are logged, never raised."""
        try:
            return self.notify(recipient, kind, title, message, **options)
        except ValidationError as exc:
            logger.warning(
                "Notification %r for user %s not created: %s", kind, getattr(recipient, "pk", None), exc
            )
        except DatabaseError as exc:
            logger.error(
                "Notification %r for user %s failed to save: %s", kind, getattr(recipient, "pk", None), exc
            )
        return None

    def notify_user(self, recipient, kind, actor=None, message=None, **options) -> Notification:
        kind = coerce_choice(NotificationKind, kind)
        title, body = generate_content(kind, actor=actor, message=message)
        return self.notify(recipient, kind, title, body, actor=actor, **options)

    def safe_notify_user(self, recipient, kind, actor=None, message=None, **options):
        try:
            return self.notify_user(recipient, kind, actor=actor, message=message, **options)
        except ValidationError as exc:
            logger.warning(
                "Notification %r for user %s not created: %s", kind, getattr(recipient, "pk", None), exc
            )
        except DatabaseError as exc:
            logger.error(
                "Notification %r for user %s failed to save: %s", kind, getattr(recipient, "pk", None), exc
            )
        return None

    def payload_for(self, notification: Notification) -> dict:
        return {
            "id": notification.pk,
            "title": notification.title,
            "message": notification.summary_text,
            "icon": notification.icon_class,
            "priority": notification.priority_name,
            "url": notification.action_url,
            "time": notification.time_ago(),
        }

    def _publish(self, notification: Notification) -> None:
        try:
            self.publisher.publish(channel_key_for(notification.recipient_id), self.payload_for(notification))
        except Exception:
            logger.exception("Failed to send real-time notification %s", notification.pk)

    def _should_push(self, notification: Notification) -> bool:
        if notification.priority not in PUSH_PRIORITIES:
            return False
        return wants_notification(notification.recipient, "push_notifications")

    def _push(self, notification: Notification) -> None:
        try:
            self.dispatcher.dispatch(notification.recipient, notification.title, notification.message)
        except Exception:
            logger.exception("Failed to dispatch push notification %s", notification.pk)

    # ---------- read state ----------
    def mark_read(self, notification: Notification) -> Notification:
        if notification.read_at is None:
            notification.read_at = timezone.now()
            notification.save(update_fields=["read_at", "updated_at"])
        return notification

    def mark_unread(self, notification: Notification) -> Notification:
        if notification.read_at is not None:
            notification.read_at = None
            notification.save(update_fields=["read_at", "updated_at"])
        return notification

    def mark_all_read(self, user) -> int:
        now = timezone.now()
        return Notification.objects.for_user(user).unread().update(read_at=now, updated_at=now)

    # ---------- queries ----------
    def unread_count(self, user) -> int:
        return Notification.objects.for_user(user).unread().count()

    def recent_for_user(self, user, limit: int = 20):
        return (
            Notification.objects.for_user(user)
            .select_related("actor", "subject_content_type")
            .prefetch_related("subject")
            .recent()[:limit]
        )

    def for_listing(self, user, filter: str = "all"):
        qs = (
            Notification.objects.for_user(user)
            .select_related("actor", "subject_content_type")
            .prefetch_related("subject")
            .recent()
        )
        if filter == "unread":
            return qs.unread()
        if filter == "read":
            return qs.read()
        if filter in TYPE_GROUPS:
            return qs.in_group(filter)
        return qs

    def clear_all(self, user) -> int:
        deleted, _ = Notification.objects.for_user(user).delete()
        return deleted

    def analytics(self, now=None) -> dict:
        now = now or timezone.now()
        week_ago = now - timedelta(days=7)
        this_week = Notification.objects.since(week_ago)
        by_kind = {
            NotificationKind(row["kind"]).label: row["n"]
            for row in Notification.objects.values("kind").annotate(n=Count("id")).order_by("kind")
        }
        by_priority = {
            Priority(row["priority"]).label: row["n"]
            for row in Notification.objects.values("priority").annotate(n=Count("id")).order_by("priority")
        }
        by_day = {
            row["day"].isoformat(): row["n"]
            for row in this_week.annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(n=Count("id"))
            .order_by("day")
        }
        top = (
            Notification.objects.values("recipient__username")
            .annotate(n=Count("id"))
            .order_by("-n", "recipient__username")[:10]
        )
        return {
            "total_notifications": Notification.objects.count(),
            "unread_notifications": Notification.objects.unread().count(),
            "by_type": by_kind,
            "by_priority": by_priority,
            "by_day": by_day,
            "this_week": this_week.count(),
            "most_active_users": [{"username": r["recipient__username"], "count": r["n"]} for r in top],
        }


notification_center = NotificationCenter()
