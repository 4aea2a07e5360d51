"""
Models for the activity app.

The ``ActivityEntry`` model stores a record of one action taken by a
user.  Each entry may reference the object it is about ("trackable":
a post, a comment or another user) via Django’s generic relations.  The
reference is weak: once the object is gone the entry stays and the
reference is cleared.  Additional metadata is stored in a JSON field.

Entries are immutable once written; rows only disappear through the
per-user retention prune or when the owning user is deleted.
"""
from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.db import models

from . import display
from .kinds import SOCIAL_KINDS, ActivityKind

__all__ = ["ActivityEntry", "ActivityKind", "ImmutableRecordError"]


class ImmutableRecordError(Exception):
    """Raised when code tries to update an already persisted activity entry."""


class ActivityEntryQuerySet(models.QuerySet):
    def recent(self):
        return self.order_by("-created_at", "-id")

    def for_user(self, user):
        return self.filter(user=user)

    def by_kind(self, kind):
        return self.filter(kind=kind)

    def since(self, when):
        return self.filter(created_at__gte=when)

    def social(self):
        return self.filter(kind__in=SOCIAL_KINDS)


class ActivityEntry(models.Model):
    """A single, immutable entry in a user's activity history."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activity_entries",
    )
    kind = models.PositiveSmallIntegerField(choices=ActivityKind.choices, db_index=True)
    description = models.CharField(max_length=500)

    # Generic (weak) relation to a post, comment or user
    trackable_content_type = models.ForeignKey(
        ContentType,
        on_delete=models.SET_NULL,
        related_name="+",
        blank=True,
        null=True,
    )
    trackable_object_id = models.PositiveBigIntegerField(blank=True, null=True)
    trackable = GenericForeignKey("trackable_content_type", "trackable_object_id")

    metadata = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(blank=True, null=True)
    user_agent = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    country = models.CharField(max_length=100, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = ActivityEntryQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="activity_user_created_idx"),
            models.Index(fields=["trackable_content_type", "trackable_object_id"], name="activity_trackable_idx"),
        ]
        verbose_name_plural = "activity entries"

    def __str__(self) -> str:
        return f"{self.get_kind_display()} by {self.user_id}"

    def clean(self):
        super().clean()
        if self.description is not None and not self.description.strip():
            raise ValidationError({"description": "This field cannot be blank."})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError("Activity entries cannot be modified once recorded.")
        super().save(*args, **kwargs)

    @property
    def kind_name(self) -> str:
        return ActivityKind(self.kind).name.lower()

    @property
    def icon_class(self) -> str:
        return display.icon_class(self.kind)

    @property
    def formatted_description(self) -> str:
        return display.formatted_description(self)

    @property
    def location_info(self) -> str:
        return display.location_info(self)

    def time_ago(self, now=None) -> str:
        return display.time_ago(self, now)
