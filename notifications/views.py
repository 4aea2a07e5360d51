# notifications/views.py
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from activity.kinds import ActivityKind
from activity.services import activity_recorder
from users.models import UserProfile
from users.serializers import NotificationPreferencesSerializer

from .models import Notification
from .serializers import NotificationSerializer
from .services import LISTING_FILTERS, notification_center

RECENT_LIMIT = 10


class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    The signed-in user's notifications.

    Listing accepts ``?filter=all|unread|read|system|social``; unknown
    values fall back to ``all``.  Opening a single notification marks it
    as read.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = NotificationSerializer

    def get_queryset(self):
        if self.action == "list":
            return notification_center.for_listing(
                self.request.user, self.request.query_params.get("filter", "all")
            )
        return Notification.objects.for_user(self.request.user).select_related("actor")

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="filter",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=list(LISTING_FILTERS),
            )
        ]
    )
    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response.data["unread_count"] = notification_center.unread_count(request.user)
        return response

    def retrieve(self, request, *args, **kwargs):
        notification = notification_center.mark_read(self.get_object())
        return Response(self.get_serializer(notification).data)

    @action(detail=True, methods=["post"], url_path="mark-read")
    def mark_read(self, request, pk=None):
        notification_center.mark_read(self.get_object())
        return Response({"status": "read", "unread_count": notification_center.unread_count(request.user)})

    @action(detail=True, methods=["post"], url_path="mark-unread")
    def mark_unread(self, request, pk=None):
        notification_center.mark_unread(self.get_object())
        return Response({"status": "unread", "unread_count": notification_center.unread_count(request.user)})

    @action(detail=False, methods=["post"], url_path="mark-all-read")
    def mark_all_read(self, request):
        updated = notification_center.mark_all_read(request.user)
        return Response({"updated": updated, "unread_count": 0})

    @action(detail=False, methods=["delete"], url_path="clear-all")
    def clear_all(self, request):
        deleted = notification_center.clear_all(request.user)
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="recent")
    def recent(self, request):
        items = notification_center.recent_for_user(request.user, limit=RECENT_LIMIT)
        return Response({
            "notifications": self.get_serializer(items, many=True).data,
            "unread_count": notification_center.unread_count(request.user),
        })

    @extend_schema(request=NotificationPreferencesSerializer, responses=NotificationPreferencesSerializer)
    @action(detail=False, methods=["get", "post"], url_path="preferences")
    def preferences(self, request):
        profile, _ = UserProfile.objects.get_or_create(user=request.user)
        if request.method == "GET":
            return Response(profile.notification_preferences or {})

        ser = NotificationPreferencesSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        prefs = dict(profile.notification_preferences or {})
        prefs.update(ser.validated_data)
        profile.notification_preferences = prefs
        profile.save(update_fields=["notification_preferences", "updated_at"])
        activity_recorder.track(
            request.user,
            ActivityKind.PREFERENCE_CHANGED,
            "Notification preferences updated",
            metadata={"changed": sorted(ser.validated_data)},
            request=request,
        )
        return Response(prefs)

    @action(detail=False, methods=["get"], url_path="analytics", permission_classes=[IsAdminUser])
    def analytics(self, request):
        return Response(notification_center.analytics())
