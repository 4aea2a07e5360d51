"""
Read-only presentation helpers for notifications.

These feed both the REST projection and the realtime payload.  The actor
and subject are weak references; a missing one is an expected state and
every helper degrades to a neutral rendering.
"""
from django.utils.text import Truncator

from common.timeago import time_ago_short
from users.models import display_name

from .kinds import NotificationKind, Priority

DEFAULT_ICON = "fas fa-bell text-muted"
READ_BACKGROUND = "bg-light"

ICONS = {
    NotificationKind.WELCOME: "fas fa-hand-wave text-primary",
    NotificationKind.ACCOUNT_VERIFIED: "fas fa-check-circle text-success",
    NotificationKind.PASSWORD_CHANGED: "fas fa-key text-warning",
    NotificationKind.SECURITY_ALERT: "fas fa-shield-alt text-danger",
    NotificationKind.NEW_FOLLOWER: "fas fa-user-plus text-success",
    NotificationKind.POST_LIKED: "fas fa-heart text-danger",
    NotificationKind.POST_COMMENTED: "fas fa-comment text-primary",
    NotificationKind.MENTIONED: "fas fa-at text-info",
    NotificationKind.FRIEND_REQUEST: "fas fa-user-friends text-success",
    NotificationKind.NEW_POST_FROM_FOLLOWED: "fas fa-plus-circle text-info",
    NotificationKind.ROLE_CHANGED: "fas fa-crown text-warning",
    NotificationKind.FEATURE_ANNOUNCEMENT: "fas fa-bullhorn text-primary",
    NotificationKind.MAINTENANCE: "fas fa-tools text-warning",
}

BACKGROUNDS = {
    Priority.URGENT: "bg-danger-subtle",
    Priority.HIGH: "bg-warning-subtle",
    Priority.NORMAL: "bg-info-subtle",
    Priority.LOW: "bg-light",
}

# "{actor}" is replaced by the actor's display name, or "Someone".
SUMMARIES = {
    NotificationKind.NEW_FOLLOWER: "{actor} started following you",
    NotificationKind.POST_LIKED: "{actor} liked your post",
    NotificationKind.POST_COMMENTED: "{actor} commented on your post",
    NotificationKind.MENTIONED: "{actor} mentioned you",
    NotificationKind.FRIEND_REQUEST: "{actor} sent you a friend request",
    NotificationKind.ROLE_CHANGED: "Your role has been updated",
}

FIXED_URLS = {
    NotificationKind.ROLE_CHANGED: "/profile",
    NotificationKind.FEATURE_ANNOUNCEMENT: "/announcements",
}

ACTOR_URL_KINDS = (NotificationKind.NEW_FOLLOWER, NotificationKind.FRIEND_REQUEST)
SUBJECT_URL_KINDS = (
    NotificationKind.POST_LIKED,
    NotificationKind.POST_COMMENTED,
    NotificationKind.NEW_POST_FROM_FOLLOWED,
)


def actor_name(actor) -> str:
    return display_name(actor) if actor is not None else "Someone"


def icon_class(kind) -> str:
    try:
        return ICONS.get(NotificationKind(kind), DEFAULT_ICON)
    except ValueError:
        return DEFAULT_ICON


def background_class(notification) -> str:
    if notification.is_read:
        return READ_BACKGROUND
    try:
        return BACKGROUNDS.get(Priority(notification.priority), READ_BACKGROUND)
    except ValueError:
        return READ_BACKGROUND


def summary_text(notification) -> str:
    template = SUMMARIES.get(notification.kind)
    if template is None:
        return Truncator(notification.message or "").chars(100)
    return template.format(actor=actor_name(notification.actor))


def _subject(notification):
    if not notification.subject_object_id:
        return None
    return notification.subject


def action_url(notification):
    kind = notification.kind
    if kind in ACTOR_URL_KINDS:
        actor = notification.actor
        return f"/users/{actor.username}" if actor is not None else None
    if kind in SUBJECT_URL_KINDS:
        subject = _subject(notification)
        if subject is None:
            return None
        if hasattr(subject, "get_absolute_url"):
            return subject.get_absolute_url()
        return None
    if kind in FIXED_URLS:
        return FIXED_URLS[kind]
    return notification.url or None


def time_ago(notification, now=None) -> str:
    return time_ago_short(notification.created_at, now)
