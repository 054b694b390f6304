"""
Authentication views.

Login opens a Django session and issues a DRF token; logout ends both.
The session state exposed by ``session_view`` is read-only here: it is
changed exclusively by the auth signal receivers in
``historiales.signals``.  Keeping these views apart from
``historiales.authentication`` avoids circular imports when Django REST
framework loads the authentication classes.
"""
from __future__ import annotations

from django.contrib.auth import authenticate, login, logout
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from historiales.authentication import forget_token, idle_timeout, touch_token
from historiales.serializers.auth import LoginSerializer
from historiales.services import session_state
from historiales.signals import login_attempted


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    """
    Username/password login.
    Returns the API token, the idle window and the session state.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    django_request = request._request
    login_attempted.send(sender=login_view, request=django_request)
    user = authenticate(django_request, username=vd['username'], password=vd['password'])
    if not user:
        return Response({'ok': False, 'detail': 'Usuario o contraseña incorrectos'}, status=400)

    login(django_request, user)
    token_obj, _ = Token.objects.get_or_create(user=user)
    touch_token(token_obj.key)

    payload: dict[str, object] = {
        'ok': True,
        'token': token_obj.key,
        'role': user.role,
        'user': {
            'id': user.id,
            'username': user.username,
            'name': user.get_full_name() or user.username,
            'role': user.role,
        },
        'idle_timeout': idle_timeout(),
        'session': session_state.describe(django_request.session, user),
    }
    return Response(payload, status=200)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    token = request.auth if isinstance(request.auth, Token) else Token.objects.filter(user=request.user).first()
    if token is not None:
        forget_token(token.key)
        token.delete()
    logout(request._request)
    return Response({'ok': True, 'session': session_state.describe(None)})


@api_view(['GET'])
@permission_classes([AllowAny])
def session_view(request):
    return Response({'ok': True, **session_state.describe(request._request.session, request.user)})
