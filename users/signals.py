"""
Signals for the users app.

* Create the `UserProfile` for every new `User` and greet the user with a
  welcome notification.
* Record a "profile_updated" activity when tracked profile fields change.
* Record sign-in / sign-out activities from Django's auth signals.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from activity.models import ActivityKind
from activity.services import activity_recorder
from notifications.models import NotificationKind
from notifications.services import notification_center

from .models import TRACKED_PROFILE_FIELDS, UserProfile

User = get_user_model()


@receiver(post_save, sender=User)
def ensure_profile(sender, instance, created, raw=False, **kwargs):
    """Ensure exactly one UserProfile exists for every User."""
    if raw:
        return
    UserProfile.objects.get_or_create(user=instance)
    if created:
        notification_center.safe_notify_user(instance, NotificationKind.WELCOME)


@receiver(pre_save, sender=UserProfile)
def _store_prev_profile(sender, instance: UserProfile, **kwargs):
    # remember previous values so post_save can tell what changed
    instance._prev_values = None
    if instance.pk:
        prev = (
            UserProfile.objects.filter(pk=instance.pk)
            .values(*TRACKED_PROFILE_FIELDS)
            .first()
        )
        instance._prev_values = prev


@receiver(post_save, sender=UserProfile)
def track_profile_updates(sender, instance: UserProfile, created, raw=False, **kwargs):
    if created or raw:
        return
    prev = getattr(instance, "_prev_values", None) or {}
    changed = [f for f in TRACKED_PROFILE_FIELDS if prev.get(f) != getattr(instance, f)]
    if not changed:
        return
    activity_recorder.track(
        instance.user,
        ActivityKind.PROFILE_UPDATED,
        "Profile information updated",
        trackable=instance.user,
        metadata={"fields": changed},
    )


@receiver(user_logged_in)
def track_sign_in(sender, request, user, **kwargs):
    activity_recorder.track(user, ActivityKind.SIGN_IN, "Signed in", request=request)


@receiver(user_logged_out)
def track_sign_out(sender, request, user, **kwargs):
    if user is None:
        return
    activity_recorder.track(user, ActivityKind.SIGN_OUT, "Signed out", request=request)
