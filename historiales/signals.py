"""
Auth signal receivers: the only code that moves the session state machine.

``login_attempted`` is sent by the login view before the credentials are
checked; the other three signals come from ``django.contrib.auth``.
"""
import logging

from django.contrib.auth.signals import user_logged_in, user_logged_out, user_login_failed
from django.dispatch import Signal, receiver

from historiales.services import session_state

logger = logging.getLogger(__name__)

login_attempted = Signal()


def _session(request):
    return getattr(request, 'session', None) if request is not None else None


@receiver(login_attempted)
def on_login_attempted(sender, request=None, **kwargs):
    session_state.apply_event(_session(request), 'login_started')


@receiver(user_logged_in)
def on_user_logged_in(sender, request=None, user=None, **kwargs):
    session_state.apply_event(_session(request), 'login_succeeded')
    logger.info('User %s logged in', getattr(user, 'username', None))


@receiver(user_login_failed)
def on_user_login_failed(sender, credentials=None, request=None, **kwargs):
    session_state.apply_event(_session(request), 'login_failed')
    logger.warning('Failed login for %s', (credentials or {}).get('username'))


@receiver(user_logged_out)
def on_user_logged_out(sender, request=None, user=None, **kwargs):
    session_state.apply_event(_session(request), 'logged_out')
    logger.info('User %s logged out', getattr(user, 'username', None))
