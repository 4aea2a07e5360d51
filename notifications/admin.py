from django.contrib import admin

from .models import Notification
from .services import notification_center


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "recipient", "kind", "priority", "title", "read_at", "created_at")
    search_fields = ("recipient__username", "title", "message")
    list_filter = ("kind", "priority")
    ordering = ("-created_at",)
    raw_id_fields = ("recipient", "actor")
    readonly_fields = ("subject_content_type", "subject_object_id", "created_at", "updated_at")
    actions = ("mark_selected_read", "mark_selected_unread")

    @admin.action(description="Mark selected notifications as read")
    def mark_selected_read(self, request, queryset):
        for notification in queryset.unread():
            notification_center.mark_read(notification)

    @admin.action(description="Mark selected notifications as unread")
    def mark_selected_unread(self, request, queryset):
        for notification in queryset.read():
            notification_center.mark_unread(notification)
