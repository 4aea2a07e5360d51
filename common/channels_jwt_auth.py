"""
JWT authentication middleware for Django Channels.

The notification socket is opened by browsers that cannot always set
headers, so the token is read either from the `Authorization: Bearer`
header or from a `?token=` query parameter.  It is validated with
SimpleJWT and `scope['user']` is populated with the matching Django user,
or an `AnonymousUser` when the token is missing or invalid.
"""

import logging
import urllib.parse
from typing import Callable

from channels.auth import AuthMiddlewareStack
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)

User = get_user_model()


@database_sync_to_async
def get_user_from_token(token):
    """Validate an access token and return its active user, or None."""
    try:
        access = AccessToken(token)
    except (InvalidToken, TokenError) as exc:
        logger.debug("Rejected websocket token: %s", exc)
        return None

    user_id = access.get(api_settings.USER_ID_CLAIM)
    if not user_id:
        return None
    return User.objects.filter(pk=user_id, is_active=True).first()


def _token_from_scope(scope):
    headers = dict(scope.get("headers", []))
    auth_header = headers.get(b"authorization", b"").decode()
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()

    qs = scope.get("query_string", b"").decode()
    params = urllib.parse.parse_qs(qs)
    return params.get("token", [None])[0]


class _JWTMiddleware(BaseMiddleware):
    """Low-level middleware to handle JWT tokens in a WebSocket scope."""

    async def __call__(self, scope, receive, send):
        token = _token_from_scope(scope)

        # Session auth (AuthMiddlewareStack) may already have resolved a user.
        if token or "user" not in scope:
            scope["user"] = AnonymousUser()

        if token:
            user = await get_user_from_token(token)
            if user:
                scope["user"] = user

        return await super().__call__(scope, receive, send)


def JWTAuthMiddlewareStack(inner: Callable):
    """Entry point for the middleware stack used by Channels routing."""
    return AuthMiddlewareStack(_JWTMiddleware(inner))
