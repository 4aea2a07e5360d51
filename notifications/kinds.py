"""
Closed enumerations for notifications: kind and priority.

Kind codes are grouped in tens (system, social, content, admin) and are
stored as integers; never renumber them.
"""
from django.db import models


class NotificationKind(models.IntegerChoices):
    # System notifications
    WELCOME = 0, "Welcome"
    ACCOUNT_VERIFIED = 1, "Account verified"
    PASSWORD_CHANGED = 2, "Password changed"
    SECURITY_ALERT = 3, "Security alert"

    # Social notifications
    NEW_FOLLOWER = 10, "New follower"
    POST_LIKED = 11, "Post liked"
    POST_COMMENTED = 12, "Post commented"
    MENTIONED = 13, "Mentioned"
    FRIEND_REQUEST = 14, "Friend request"

    # Content notifications
    NEW_POST_FROM_FOLLOWED = 20, "New post from followed"
    POST_UPDATED = 21, "Post updated"
    CONTENT_FEATURED = 22, "Content featured"

    # Admin notifications
    ROLE_CHANGED = 30, "Role changed"
    ACCOUNT_WARNING = 31, "Account warning"
    FEATURE_ANNOUNCEMENT = 32, "Feature announcement"
    MAINTENANCE = 33, "Maintenance"


class Priority(models.IntegerChoices):
    LOW = 0, "Low"
    NORMAL = 1, "Normal"
    HIGH = 2, "High"
    URGENT = 3, "Urgent"


PUSH_PRIORITIES = (Priority.HIGH, Priority.URGENT)

# Coarse groups used by the listing filter
TYPE_GROUPS = {
    "system": (
        NotificationKind.WELCOME,
        NotificationKind.ACCOUNT_VERIFIED,
        NotificationKind.PASSWORD_CHANGED,
        NotificationKind.SECURITY_ALERT,
        NotificationKind.FEATURE_ANNOUNCEMENT,
        NotificationKind.MAINTENANCE,
    ),
    "social": (
        NotificationKind.NEW_FOLLOWER,
        NotificationKind.POST_LIKED,
        NotificationKind.POST_COMMENTED,
        NotificationKind.MENTIONED,
        NotificationKind.FRIEND_REQUEST,
    ),
}
