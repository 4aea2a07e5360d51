# activity/apps.py
from django.apps import AppConfig

class ActivityConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "activity"

    def ready(self):
        # import signals so receivers register
        from . import signals  # noqa
