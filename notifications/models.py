"""
Models for the notifications app.

``Notification`` is a message addressed to one recipient, optionally
caused by another user (the actor) and optionally about some object
(the subject, via Django's generic relations).  The only mutable state
is ``read_at``: ``None`` while unread, the read time afterwards.
"""
from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.core.validators import MaxLengthValidator
from django.db import models

from . import display
from .kinds import TYPE_GROUPS, NotificationKind, Priority

__all__ = ["Notification", "NotificationKind", "Priority"]

MESSAGE_MAX_LENGTH = 1000


class NotificationQuerySet(models.QuerySet):
    def unread(self):
        return self.filter(read_at__isnull=True)

    def read(self):
        return self.filter(read_at__isnull=False)

    def recent(self):
        return self.order_by("-created_at", "-id")

    def for_user(self, user):
        return self.filter(recipient=user)

    def by_kind(self, kind):
        return self.filter(kind=kind)

    def in_group(self, group):
        return self.filter(kind__in=TYPE_GROUPS[group])

    def since(self, when):
        return self.filter(created_at__gte=when)


class Notification(models.Model):
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="notifications", on_delete=models.CASCADE
    )
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="notifications_as_actor",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )
    # Generic (weak) relation to whatever the notification is about
    subject_content_type = models.ForeignKey(
        ContentType,
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
    )
    subject_object_id = models.PositiveBigIntegerField(null=True, blank=True)
    subject = GenericForeignKey("subject_content_type", "subject_object_id")

    kind = models.PositiveSmallIntegerField(choices=NotificationKind.choices)
    priority = models.PositiveSmallIntegerField(choices=Priority.choices, default=Priority.NORMAL)
    title = models.CharField(max_length=255)
    message = models.TextField(validators=[MaxLengthValidator(MESSAGE_MAX_LENGTH)])
    url = models.CharField(max_length=500, blank=True, default="")
    read_at = models.DateTimeField(null=True, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["recipient", "read_at"], name="notif_recipient_read_idx"),
            models.Index(fields=["recipient", "created_at"], name="notif_recipient_created_idx"),
            models.Index(fields=["kind"], name="notif_kind_idx"),
            models.Index(fields=["subject_content_type", "subject_object_id"], name="notif_subject_idx"),
        ]

    def __str__(self):
        return f"Notification(to={self.recipient_id}, kind={self.kind_name}, read={self.is_read})"

    def clean(self):
        super().clean()
        errors = {}
        for field in ("title", "message"):
            value = getattr(self, field)
            if value is not None and not value.strip():
                errors[field] = "This field cannot be blank."
        if errors:
            raise ValidationError(errors)

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    @property
    def kind_name(self) -> str:
        return NotificationKind(self.kind).name.lower()

    @property
    def priority_name(self) -> str:
        return Priority(self.priority).name.lower()

    @property
    def icon_class(self) -> str:
        return display.icon_class(self.kind)

    @property
    def background_class(self) -> str:
        return display.background_class(self)

    @property
    def summary_text(self) -> str:
        return display.summary_text(self)

    @property
    def action_url(self):
        return display.action_url(self)

    def time_ago(self, now=None) -> str:
        return display.time_ago(self, now)
