"""
Project-level Channels routing configuration.

This module defines the URL routes for all WebSocket connections.  The
ASGI application wraps them with the JWT authentication middleware stack.
"""
from realtime.routing import websocket_urlpatterns as realtime_ws

websocket_urlpatterns = [
    *realtime_ws,
]
