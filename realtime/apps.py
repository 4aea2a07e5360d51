from django.apps import AppConfig


class RealtimeConfig(AppConfig):
    """Configuration for the realtime app.

    The realtime app pushes freshly created notifications to connected
    browsers over Django Channels.  Each user listens on their own group,
    ``<NOTIFICATIONS_CHANNEL_PREFIX><user id>``.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "realtime"
