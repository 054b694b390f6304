"""
Per-session authentication state machine.

States are ``unauthenticated``, ``authenticating`` and ``authenticated``;
the current state is stored in the Django session under
``SESSION_KEY``.  Only the auth signal receivers in
:mod:`historiales.signals` call the mutating functions here; views read
the state through :func:`current_state`.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SESSION_KEY = '_auth_state'

UNAUTHENTICATED = 'unauthenticated'
AUTHENTICATING = 'authenticating'
AUTHENTICATED = 'authenticated'

# event -> {from_state: to_state}
TRANSITIONS: Dict[str, Dict[str, str]] = {
    'login_started': {
        UNAUTHENTICATED: AUTHENTICATING,
        AUTHENTICATING: AUTHENTICATING,
        AUTHENTICATED: AUTHENTICATING,
    },
    'login_succeeded': {
        UNAUTHENTICATED: AUTHENTICATED,
        AUTHENTICATING: AUTHENTICATED,
        AUTHENTICATED: AUTHENTICATED,
    },
    'login_failed': {
        AUTHENTICATING: UNAUTHENTICATED,
        UNAUTHENTICATED: UNAUTHENTICATED,
        AUTHENTICATED: AUTHENTICATED,
    },
    'logged_out': {
        UNAUTHENTICATED: UNAUTHENTICATED,
        AUTHENTICATING: UNAUTHENTICATED,
        AUTHENTICATED: UNAUTHENTICATED,
    },
}


class InvalidTransition(Exception):
    pass


def current_state(session) -> str:
    if session is None:
        return UNAUTHENTICATED
    return session.get(SESSION_KEY, UNAUTHENTICATED)


def next_state(state: str, event: str) -> str:
    try:
        return TRANSITIONS[event][state]
    except KeyError:
        raise InvalidTransition(f'{event} is not allowed from {state}')


def apply_event(session, event: str) -> Tuple[str, str]:
    """Move ``session`` to the state ``event`` leads to; return (old, new)."""
    old = current_state(session)
    new = next_state(old, event)
    if session is not None:
        session[SESSION_KEY] = new
    if old != new:
        logger.debug('session state %s -> %s (%s)', old, new, event)
    return old, new


def describe(session, user=None) -> Dict[str, Optional[object]]:
    """Read-only snapshot returned by the session endpoint."""
    state = current_state(session)
    authenticated = state == AUTHENTICATED and bool(user and user.is_authenticated)
    return {
        'state': state if authenticated or state != AUTHENTICATED else UNAUTHENTICATED,
        'user': {'id': user.id, 'username': user.username, 'role': user.role} if authenticated else None,
    }
