"""
Read-only presentation helpers for activity entries.

Computed on read, never stored.  A trackable object that has since been
deleted is a normal state here: every helper falls back to a generic
phrase instead of failing.
"""
from django.utils.text import Truncator

from common.timeago import time_ago_words
from users.models import display_name

from .kinds import ActivityKind

DEFAULT_ICON = "fas fa-circle text-muted"

ICONS = {
    ActivityKind.SIGN_IN: "fas fa-sign-in-alt text-success",
    ActivityKind.SIGN_OUT: "fas fa-sign-out-alt text-muted",
    ActivityKind.PASSWORD_CHANGED: "fas fa-key text-warning",
    ActivityKind.EMAIL_CHANGED: "fas fa-envelope text-info",
    ActivityKind.PROFILE_UPDATED: "fas fa-user-edit text-primary",
    ActivityKind.AVATAR_UPLOADED: "fas fa-image text-success",
    ActivityKind.POST_CREATED: "fas fa-plus-circle text-success",
    ActivityKind.POST_UPDATED: "fas fa-edit text-info",
    ActivityKind.COMMENT_CREATED: "fas fa-comment text-primary",
    ActivityKind.LIKE_GIVEN: "fas fa-heart text-danger",
    ActivityKind.FOLLOW_USER: "fas fa-user-plus text-success",
    ActivityKind.ROLE_ASSIGNED: "fas fa-crown text-warning",
}


def icon_class(kind) -> str:
    try:
        return ICONS.get(ActivityKind(kind), DEFAULT_ICON)
    except ValueError:
        return DEFAULT_ICON


def location_info(entry) -> str:
    if not entry.ip_address:
        return "Unknown location"
    return entry.city or entry.country or "Unknown location"


def _trackable(entry):
    # GenericForeignKey resolves to None when the object no longer exists
    if not entry.trackable_object_id:
        return None
    return entry.trackable


def formatted_description(entry) -> str:
    try:
        kind = ActivityKind(entry.kind)
    except ValueError:
        return entry.description

    if kind == ActivityKind.SIGN_IN:
        return f"Signed in from {location_info(entry)}"
    if kind == ActivityKind.SIGN_OUT:
        return "Signed out"
    if kind == ActivityKind.PROFILE_UPDATED:
        return "Updated profile information"
    if kind == ActivityKind.AVATAR_UPLOADED:
        return "Uploaded a new profile picture"
    if kind == ActivityKind.POST_CREATED:
        post = _trackable(entry)
        if post is None:
            return "Created a new post"
        title = Truncator(getattr(post, "title", "") or "").chars(50)
        return f'Created a new post: "{title}"'
    if kind == ActivityKind.COMMENT_CREATED:
        return "Commented on a post" if _trackable(entry) is not None else "Added a comment"
    if kind == ActivityKind.LIKE_GIVEN:
        return "Liked a post"
    if kind == ActivityKind.FOLLOW_USER:
        followed = _trackable(entry)
        if followed is None:
            return "Followed a user"
        return f"Started following {display_name(followed)}"
    return entry.description


def time_ago(entry, now=None) -> str:
    return time_ago_words(entry.created_at, now)
