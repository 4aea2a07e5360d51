"""
Tests for user profiles: automatic creation, display names and
notification preferences.
"""
import pytest
from django.contrib.auth.models import User

from users.models import UserProfile, display_name, wants_notification
from users.serializers import NotificationPreferencesSerializer


@pytest.mark.django_db
def test_profile_created_once_per_user(user):
    assert UserProfile.objects.filter(user=user).count() == 1
    user.first_name = "Una"
    user.save()
    assert UserProfile.objects.filter(user=user).count() == 1


@pytest.mark.django_db
def test_display_name_fallbacks(user):
    assert display_name(user) == "u1"

    nameless = User.objects.create_user(username="tmp", password="pass12345")
    nameless.username = ""
    nameless.profile.full_name = "Ada Lovelace"
    assert display_name(nameless) == "Ada Lovelace"

    nameless.profile.full_name = ""
    assert display_name(nameless) == f"User #{nameless.pk}"
    assert display_name(None) == ""


@pytest.mark.django_db
def test_preferences_default_to_enabled(user):
    assert user.profile.notification_preferences == {}
    assert wants_notification(user, "post_commented") is True

    user.profile.notification_preferences = {"post_commented": False}
    user.profile.save()
    user.refresh_from_db()
    assert wants_notification(user, "post_commented") is False
    assert wants_notification(user, "push_notifications") is True


@pytest.mark.django_db
def test_user_without_profile_wants_everything(user):
    UserProfile.objects.filter(user=user).delete()
    user = User.objects.get(pk=user.pk)
    assert wants_notification(user, "post_commented") is True


def test_preferences_serializer_only_accepts_known_keys():
    ser = NotificationPreferencesSerializer(data={"weekly_digest": "true", "unknown": True})
    assert ser.is_valid(), ser.errors
    assert ser.validated_data == {"weekly_digest": True}
