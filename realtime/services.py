# realtime/services.py
import logging
import json

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_PREFIX = "notifications_"
MESSAGE_TYPE = "notification.message"


def channel_key_for(user_or_id) -> str:
    """Channel group a user's browser sessions listen on."""
    prefix = getattr(settings, "NOTIFICATIONS_CHANNEL_PREFIX", DEFAULT_CHANNEL_PREFIX)
    user_id = getattr(user_or_id, "pk", user_or_id)
    return f"{prefix}{user_id}"


class ChannelLayerPublisher:
    """
    Publish JSON payloads to a Channels group.

    Delivery is best effort: with no channel layer configured the call is a
    no-op, and errors from the layer propagate to the caller.
    """

    def publish(self, channel_key: str, payload: dict) -> bool:
        channel_layer = get_channel_layer()
        if channel_layer is None:
            logger.debug("No channel layer configured; dropping message for %s", channel_key)
            return False
        # round-trip through DjangoJSONEncoder so datetimes etc. survive msgpack
        data = json.loads(json.dumps(payload, cls=DjangoJSONEncoder))
        async_to_sync(channel_layer.group_send)(
            channel_key,
            {"type": MESSAGE_TYPE, "notification": data},
        )
        return True
