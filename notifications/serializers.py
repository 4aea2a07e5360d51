from rest_framework import serializers

from users.serializers import UserTinySerializer

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    actor = UserTinySerializer(read_only=True)
    kind = serializers.CharField(source="kind_name", read_only=True)
    kind_code = serializers.IntegerField(source="kind", read_only=True)
    priority = serializers.CharField(source="priority_name", read_only=True)
    summary = serializers.CharField(source="summary_text", read_only=True)
    icon = serializers.CharField(source="icon_class", read_only=True)
    background = serializers.CharField(source="background_class", read_only=True)
    url = serializers.CharField(source="action_url", read_only=True, allow_null=True)
    read = serializers.BooleanField(source="is_read", read_only=True)
    subject = serializers.SerializerMethodField()
    time_ago = serializers.SerializerMethodField()

    class Meta:
        model = Notification
        fields = (
            "id", "kind", "kind_code", "priority", "title", "message", "summary",
            "icon", "background", "url", "read", "read_at", "actor", "subject",
            "metadata", "time_ago", "created_at",
        )
        read_only_fields = fields

    def get_subject(self, obj):
        if not obj.subject_object_id or obj.subject_content_type_id is None:
            return None
        return {
            "type": obj.subject_content_type.model,
            "id": obj.subject_object_id,
        }

    def get_time_ago(self, obj):
        return obj.time_ago()
