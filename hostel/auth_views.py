"""
Authentication views: registration, login, token refresh and logout.

Login hands out both the legacy DRF token (used by the WebSocket
``?token=`` query string) and a SimpleJWT access/refresh pair.  These
views live apart from ``hostel.authentication`` so DRF can load its
authentication classes without importing them.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from hostel.models import User
from hostel.serializers.auth import LoginSerializer, LogoutSerializer, RegisterSerializer
from hostel.services.audit import log_action
from hostel.throttles import LoginRateThrottle, RegisterRateThrottle

logger = logging.getLogger(__name__)


def user_summary(user: User) -> dict:
    return {
        'id': user.id,
        'email': user.email,
        'name': user.display_name,
        'role': user.role,
    }


def _token_payload(user: User) -> dict:
    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return {
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'user': user_summary(user),
    }


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([RegisterRateThrottle])
def register_view(request):
    """Create an account.  The configured admin email registers as the admin."""
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    role = User.ROLE_ADMIN if vd['email'] == settings.HOSTEL_ADMIN_EMAIL else User.ROLE_STUDENT
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=vd['email'],
                email=vd['email'],
                password=vd['password'],
                first_name=vd['fullName'],
                role=role,
            )
    except IntegrityError:
        raise ValidationError({'email': 'An account with this email already exists.'})
    logger.info("Registered %s as %s", user.pk, role)
    log_action(user=user, action='register', object_type='user', object_id=user.id,
               detail={'role': role, 'ip': request.META.get('REMOTE_ADDR')})
    return Response(_token_payload(user), status=201)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data['email']

    user = authenticate(request, username=email, password=s.validated_data['password'])
    if not user:
        logger.warning("Failed login for %s", email)
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'email': email, 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'ok': False, 'error': {'code': 'invalid_credentials',
                                                'message': 'Invalid email or password.'}}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    return Response(_token_payload(user), status=200)


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from a refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    if resp.status_code != 200:
        # already shaped by the API exception handler
        return Response(resp.data, status=resp.status_code)
    data = dict(resp.data)
    data['jwt_access'] = data.pop('access')
    if 'refresh' in data:
        data['jwt_refresh'] = data.pop('refresh')
    return Response({'ok': True, **data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Blacklist the given refresh token (or all of the user's) and drop the legacy token."""
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')
    count = 0
    if refresh:
        try:
            token = RefreshToken(refresh)
        except TokenError:
            logger.info("Logout with an invalid refresh token for %s", request.user.pk)
        else:
            if str(token.get(jwt_settings.USER_ID_CLAIM)) != str(request.user.pk):
                logger.warning("User %s tried to revoke a refresh token of another account", request.user.pk)
                raise PermissionDenied('This refresh token belongs to another account.')
            token.blacklist()
            count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id,
               detail={'blacklisted': count})
    return Response({'ok': True, 'blacklisted': count})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    return Response({'ok': True, 'data': user_summary(request.user)})
