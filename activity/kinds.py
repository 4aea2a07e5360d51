"""
Closed enumeration of activity kinds.

Each kind has a fixed integer code used for storage and filtering; the
codes are grouped in tens (authentication, profile, social, system,
admin) and must never be renumbered.
"""
from django.db import models


class ActivityKind(models.IntegerChoices):
    # Authentication activities
    SIGN_IN = 0, "Sign in"
    SIGN_OUT = 1, "Sign out"
    PASSWORD_CHANGED = 2, "Password changed"
    EMAIL_CHANGED = 3, "Email changed"
    ACCOUNT_CONFIRMED = 4, "Account confirmed"

    # Profile activities
    PROFILE_UPDATED = 10, "Profile updated"
    AVATAR_UPLOADED = 11, "Avatar uploaded"
    COVER_PHOTO_UPLOADED = 12, "Cover photo uploaded"

    # Social activities
    POST_CREATED = 20, "Post created"
    POST_UPDATED = 21, "Post updated"
    POST_DELETED = 22, "Post deleted"
    COMMENT_CREATED = 23, "Comment created"
    LIKE_GIVEN = 24, "Like given"
    FOLLOW_USER = 25, "Follow user"
    UNFOLLOW_USER = 26, "Unfollow user"

    # System activities
    FEATURE_USED = 30, "Feature used"
    PREFERENCE_CHANGED = 31, "Preference changed"
    NOTIFICATION_READ = 32, "Notification read"

    # Admin activities
    ROLE_ASSIGNED = 40, "Role assigned"
    ROLE_REMOVED = 41, "Role removed"
    USER_SUSPENDED = 42, "User suspended"
    USER_UNSUSPENDED = 43, "User unsuspended"


SOCIAL_KINDS = (
    ActivityKind.POST_CREATED,
    ActivityKind.POST_UPDATED,
    ActivityKind.POST_DELETED,
    ActivityKind.COMMENT_CREATED,
    ActivityKind.LIKE_GIVEN,
    ActivityKind.FOLLOW_USER,
    ActivityKind.UNFOLLOW_USER,
)


def humanize(kind) -> str:
    """"post_created" -> "Post created" (the default description)."""
    return ActivityKind(kind).name.replace("_", " ").capitalize()
