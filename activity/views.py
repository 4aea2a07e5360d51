# activity/views.py
from datetime import timedelta

from django.core.exceptions import ValidationError
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ReadOnlyModelViewSet

from common.choices import coerce_choice

from .kinds import ActivityKind
from .models import ActivityEntry
from .serializers import ActivityEntrySerializer
from .services import activity_recorder


class ActivityEntryViewSet(ReadOnlyModelViewSet):
    """The signed-in user's own activity history, newest first."""

    permission_classes = [IsAuthenticated]
    serializer_class = ActivityEntrySerializer

    def get_queryset(self):
        qs = (
            ActivityEntry.objects.for_user(self.request.user)
            .select_related("user", "trackable_content_type")
            .recent()
        )
        kind = self.request.query_params.get("kind")
        if kind:
            try:
                qs = qs.by_kind(coerce_choice(ActivityKind, kind))
            except ValidationError:
                return qs.none()
        return qs

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="days",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Size of the window in days (default 7, max 365)",
            )
        ]
    )
    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        try:
            days = int(request.query_params.get("days", 7))
        except ValueError:
            days = 7
        days = max(1, min(days, 365))
        data = activity_recorder.summary(request.user, period=timedelta(days=days))
        data["days"] = days
        return Response(data)

    @action(detail=False, methods=["get"], url_path="analytics", permission_classes=[IsAdminUser])
    def analytics(self, request):
        return Response(activity_recorder.analytics())
