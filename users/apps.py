from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Configuration for the users app (profiles and account lifecycle hooks)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"

    def ready(self) -> None:
        # Import signal handlers
        from . import signals  # noqa: F401
