from rest_framework import serializers

from users.serializers import UserTinySerializer

from .models import ActivityEntry


class ActivityEntrySerializer(serializers.ModelSerializer):
    user = UserTinySerializer(read_only=True)
    kind = serializers.CharField(source="kind_name", read_only=True)
    kind_code = serializers.IntegerField(source="kind", read_only=True)
    icon = serializers.CharField(source="icon_class", read_only=True)
    description = serializers.CharField(source="formatted_description", read_only=True)
    raw_description = serializers.CharField(source="description", read_only=True)
    trackable = serializers.SerializerMethodField()
    time_ago = serializers.SerializerMethodField()

    class Meta:
        model = ActivityEntry
        fields = (
            "id", "user", "kind", "kind_code", "icon",
            "description", "raw_description", "trackable",
            "metadata", "time_ago", "created_at",
        )
        read_only_fields = fields

    def get_trackable(self, obj):
        if not obj.trackable_object_id or obj.trackable_content_type_id is None:
            return None
        return {
            "type": obj.trackable_content_type.model,
            "id": obj.trackable_object_id,
        }

    def get_time_ago(self, obj):
        return obj.time_ago()
