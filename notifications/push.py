"""
Push notification dispatchers.

The dispatcher used by ``NotificationCenter`` is configured with the
``NOTIFICATIONS_PUSH_DISPATCHER`` setting (dotted path to a class).  The
default only logs; plug a real provider (FCM, OneSignal, ...) in by
subclassing ``PushDispatcher``.
"""
import logging

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

DEFAULT_DISPATCHER = "notifications.push.LoggingPushDispatcher"


class PushDispatcher:
    def dispatch(self, user, title: str, body: str) -> None:
        raise NotImplementedError


class LoggingPushDispatcher(PushDispatcher):
    def dispatch(self, user, title: str, body: str) -> None:
        logger.info("Push notification would be sent to user %s: %s", user.pk, title)


def get_push_dispatcher() -> PushDispatcher:
    path = getattr(settings, "NOTIFICATIONS_PUSH_DISPATCHER", DEFAULT_DISPATCHER) or DEFAULT_DISPATCHER
    return import_string(path)()
