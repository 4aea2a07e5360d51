"""
Channels consumer for live notifications.

Authenticated users connect to ``ws/notifications/`` (JWT in the
``Authorization`` header or ``?token=``) and are subscribed to their own
notification group.  The server pushes ``notification.created`` events;
the client may send ``{"type": "ping"}`` to keep the socket alive.
"""
from __future__ import annotations

from typing import Any

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .services import channel_key_for


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """Realtime feed of the connected user's new notifications."""

    async def connect(self) -> None:
        user = self.scope.get("user")
        if not user or not user.is_authenticated:
            await self.close()
            return
        self.group_name = channel_key_for(user.pk)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, code: int) -> None:
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive_json(self, content: dict[str, Any], **kwargs: Any) -> None:
        if content.get("type") == "ping":
            await self.send_json({"type": "pong"})

    async def notification_message(self, event: dict[str, Any]) -> None:
        await self.send_json({"type": "notification.created", "notification": event["notification"]})
