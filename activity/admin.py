from django.contrib import admin

from .models import ActivityEntry


@admin.register(ActivityEntry)
class ActivityEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "kind", "description", "ip_address", "created_at")
    search_fields = ("user__username", "description", "ip_address")
    list_filter = ("kind",)
    ordering = ("-created_at",)
    readonly_fields = [f.name for f in ActivityEntry._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
