"""
WebSocket authentication by DRF token.

Browsers cannot set an ``Authorization`` header on a WebSocket upgrade,
so the legacy token travels in the ``?token=`` query string.  When no
token is given the session user resolved by ``AuthMiddlewareStack`` is
kept.
"""
from urllib.parse import parse_qs

from channels.auth import AuthMiddlewareStack
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework.authtoken.models import Token


@database_sync_to_async
def get_token_user(key: str):
    token = Token.objects.select_related('user').filter(key=key).first()
    if token is None or not token.user.is_active:
        return AnonymousUser()
    return token.user


class TokenAuthMiddleware(BaseMiddleware):
    async def __call__(self, scope, receive, send):
        params = parse_qs(scope.get('query_string', b'').decode())
        key = (params.get('token') or [None])[0]
        if key:
            scope = dict(scope, user=await get_token_user(key))
        return await super().__call__(scope, receive, send)


def TokenAuthMiddlewareStack(inner):
    return AuthMiddlewareStack(TokenAuthMiddleware(inner))
