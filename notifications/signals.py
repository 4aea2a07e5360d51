# notifications/signals.py
"""
Keep notification subjects weak.

Deleting the post, comment or user a notification is about leaves the
notification in place with its subject cleared.  The actor is a real
foreign key and is nulled by ``on_delete=SET_NULL``.
"""
from django.conf import settings
from django.contrib.contenttypes.models import ContentType
from django.db.models.signals import post_delete

from .models import Notification

SUBJECT_MODELS = ("posts.Post", "posts.Comment", settings.AUTH_USER_MODEL)


def clear_subject_references(sender, instance, **kwargs):
    ct = ContentType.objects.get_for_model(sender)
    Notification.objects.filter(
        subject_content_type=ct, subject_object_id=instance.pk
    ).update(subject_content_type=None, subject_object_id=None)


for _label in SUBJECT_MODELS:
    post_delete.connect(
        clear_subject_references,
        sender=_label,
        dispatch_uid=f"notifications_clear_subject_{_label}",
    )
