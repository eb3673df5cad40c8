"""
Authentication Views - SEB Server Admin Backend

JWT authentication endpoints for the administration API.

Views:
- SEBTokenObtainPairView: JWT pair stored in HTTP-only cookies
- SEBTokenRefreshView: Token refresh from cookie or request body
- LogoutView: Refresh token blacklisting and cookie removal

Author: SEB Server Development Team
Version: 1.0.0
"""

import logging

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from core.exceptions import ErrorMessage

from ..serializers import SEBTokenObtainPairSerializer

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


def set_token_cookies(response: Response, access: str = None, refresh: str = None) -> Response:
    """
    Stores tokens in HTTP-only cookies.

    * httponly=True prevents JavaScript access
    * secure / samesite come from JWT_COOKIE_SECURE / JWT_COOKIE_SAMESITE
    """
    jwt_settings = settings.SIMPLE_JWT
    options = {
        "httponly": True,
        "secure": getattr(settings, "JWT_COOKIE_SECURE", True),
        "samesite": getattr(settings, "JWT_COOKIE_SAMESITE", "Lax"),
        "path": "/",
    }
    if refresh:
        response.set_cookie(
            REFRESH_COOKIE,
            refresh,
            max_age=int(jwt_settings["REFRESH_TOKEN_LIFETIME"].total_seconds()),
            **options,
        )
    if access:
        response.set_cookie(
            ACCESS_COOKIE,
            access,
            max_age=int(jwt_settings["ACCESS_TOKEN_LIFETIME"].total_seconds()),
            **options,
        )
    return response


class SEBTokenObtainPairView(TokenObtainPairView):
    """
    Issues a JWT pair and sets it as HTTP-only cookies. The tokens are also
    returned in the body for API clients using the Authorization header.
    """

    serializer_class = SEBTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == status.HTTP_200_OK:
            set_token_cookies(response, response.data.get("access"), response.data.get("refresh"))
        return response


class SEBTokenRefreshView(APIView):
    """Refreshes the JWT pair, reading the refresh token from the body or the cookie."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request: Request) -> Response:
        refresh_token = request.data.get("refresh") or request.COOKIES.get(REFRESH_COOKIE)
        if not refresh_token:
            return Response(
                [ErrorMessage.ILLEGAL_API_ARGUMENT.of("Refresh token not provided").to_dict()],
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = TokenRefreshSerializer(data={"refresh": refresh_token})
        try:
            serializer.is_valid(raise_exception=True)
        except (TokenError, exceptions.AuthenticationFailed) as e:
            return Response(
                [ErrorMessage.UNAUTHORIZED.of(str(e)).to_dict()],
                status=status.HTTP_401_UNAUTHORIZED,
            )

        data = serializer.validated_data
        response = Response(
            {"access": data.get("access"), "refresh": data.get("refresh")},
            status=status.HTTP_200_OK,
        )
        return set_token_cookies(response, data.get("access"), data.get("refresh"))


class LogoutView(APIView):
    """
    Invalidates the refresh token and clears the token cookies.
    Always answers 205 Reset Content.
    """

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        refresh_token = request.data.get("refresh") or request.COOKIES.get(REFRESH_COOKIE)
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                logger.info("Logout with invalid refresh token: %s", e)
        response = Response({"detail": "Successfully logged out."}, status=status.HTTP_205_RESET_CONTENT)
        response.delete_cookie(REFRESH_COOKIE)
        response.delete_cookie(ACCESS_COOKIE)
        return response
