from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import NOTIFICATION_PREFERENCE_KEYS, display_name

User = get_user_model()


class UserTinySerializer(serializers.ModelSerializer):
    """Tiny projection of a user suitable for notification actors and activity owners."""
    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ("id", "username", "display_name")
        read_only_fields = fields

    def get_display_name(self, obj):
        return display_name(obj)


class NotificationPreferencesSerializer(serializers.Serializer):
    """Boolean switches stored on UserProfile.notification_preferences."""

    def get_fields(self):
        return {
            key: serializers.BooleanField(required=False)
            for key in NOTIFICATION_PREFERENCE_KEYS
        }
