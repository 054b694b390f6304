"""
Token authentication with an inactivity window.

This subclass of Django REST framework's ``TokenAuthentication`` records
the time of the last request made with each token in the cache.  A
token left unused for longer than ``SESSION_IDLE_TIMEOUT`` seconds is
deleted and the request is rejected, mirroring the idle logout applied
to browser sessions by :class:`historiales.middleware.InactivityLogoutMiddleware`.
"""
from __future__ import annotations

import logging
import time

from django.conf import settings
from django.core.cache import cache
from rest_framework import authentication, exceptions

logger = logging.getLogger(__name__)


def _activity_key(key: str) -> str:
    return f'token-activity:{key}'


def idle_timeout() -> int:
    return int(getattr(settings, 'SESSION_IDLE_TIMEOUT', 300))


def touch_token(key: str) -> None:
    """Mark the token as used now."""
    cache.set(_activity_key(key), time.time(), timeout=idle_timeout() * 2)


def forget_token(key: str) -> None:
    cache.delete(_activity_key(key))


class TokenAuthentication(authentication.TokenAuthentication):
    """``Authorization: Token <key>`` with idle expiry."""

    keyword = 'Token'

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)
        last = cache.get(_activity_key(key))
        if last is None or time.time() - float(last) > idle_timeout():
            logger.info('Token of %s expired after inactivity', user.username)
            token.delete()
            forget_token(key)
            raise exceptions.AuthenticationFailed('Sesión expirada por inactividad.')
        touch_token(key)
        return user, token
