"""
Models for the users app.

A `UserProfile` model extends the built-in `auth.User` with additional
fields.  A `OneToOneField` links each profile to its user.  The
`UserProfile` is created automatically via signals when a new user
instance is saved, and carries the user's notification preferences.
"""
from django.contrib.auth.models import User
from django.db import models

# Keys accepted in UserProfile.notification_preferences (all booleans).
NOTIFICATION_PREFERENCE_KEYS = (
    "email_notifications",
    "push_notifications",
    "sms_notifications",
    "new_follower",
    "post_liked",
    "post_commented",
    "mentioned",
    "friend_request",
    "system_updates",
    "marketing_emails",
    "weekly_digest",
    "security_alerts",
)

# Profile fields whose change is recorded as a "profile_updated" activity.
TRACKED_PROFILE_FIELDS = ("full_name", "bio", "location")


class UserProfile(models.Model):
    """Extension of Django's built-in User model."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    full_name = models.CharField(max_length=255, blank=True)
    bio = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)
    notification_preferences = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Profile of {self.user.username}"

    def wants(self, key: str) -> bool:
        """A preference counts as enabled unless explicitly set to False."""
        return (self.notification_preferences or {}).get(key) is not False


def display_name(user) -> str:
    """Username first, then profile/full name, then a generic label."""
    if user is None:
        return ""
    username = getattr(user, "username", "") or ""
    if username:
        return username
    profile = getattr(user, "profile", None)
    full = getattr(profile, "full_name", "") if profile else ""
    if not full:
        full = user.get_full_name() if hasattr(user, "get_full_name") else ""
    return full or f"User #{user.pk}"


def wants_notification(user, key: str) -> bool:
    """``UserProfile.wants`` for ``user``; a user without a profile wants everything."""
    try:
        profile = user.profile
    except UserProfile.DoesNotExist:
        return True
    return profile.wants(key)
