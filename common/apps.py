from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Shared helpers (pagination, formatting, auth middleware) used by every app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
