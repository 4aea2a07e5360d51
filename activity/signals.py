# activity/signals.py
"""
Keep trackable references weak.

When a post, comment or user goes away, activity entries that point at
it keep existing; only their generic reference is cleared.
"""
from django.conf import settings
from django.contrib.contenttypes.models import ContentType
from django.db.models.signals import post_delete

from .models import ActivityEntry

TRACKABLE_MODELS = ("posts.Post", "posts.Comment", settings.AUTH_USER_MODEL)


def clear_trackable_references(sender, instance, **kwargs):
    ct = ContentType.objects.get_for_model(sender)
    ActivityEntry.objects.filter(
        trackable_content_type=ct, trackable_object_id=instance.pk
    ).update(trackable_content_type=None, trackable_object_id=None)


for _label in TRACKABLE_MODELS:
    post_delete.connect(
        clear_trackable_references,
        sender=_label,
        dispatch_uid=f"activity_clear_trackable_{_label}",
    )
