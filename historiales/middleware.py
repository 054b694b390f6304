import logging
import time

from django.conf import settings
from django.contrib.auth import logout

logger = logging.getLogger(__name__)

LAST_ACTIVITY_KEY = '_last_activity'


class InactivityLogoutMiddleware:
    """Log out session users idle for longer than ``SESSION_IDLE_TIMEOUT`` seconds.

    Every authenticated request resets the idle window.  Must run after
    ``AuthenticationMiddleware``.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            timeout = getattr(settings, 'SESSION_IDLE_TIMEOUT', 300)
            now = time.time()
            last = request.session.get(LAST_ACTIVITY_KEY)
            if last is not None and now - float(last) > timeout:
                logger.info('Session of %s expired after %ss of inactivity', user.username, timeout)
                logout(request)
            else:
                request.session[LAST_ACTIVITY_KEY] = now
        return self.get_response(request)
