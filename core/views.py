"""
Info Views - SEB Server Admin Backend

Endpoints:
- GET /info/logo/{url_suffix}/   Base64 logo of the institution serving the URL suffix (anonymous)
- GET /info/privileges/          Role privilege table

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import Optional

from django.http import HttpResponse
from rest_framework import permissions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.authorization import AuthorizationService
from core.institutions.models import Institution


def find_institution_for_suffix(url_suffix: str) -> Optional[Institution]:
    """First active institution whose url_suffix the given suffix ends with."""
    candidates = Institution.objects.filter(active=True).exclude(url_suffix="").order_by("pk")
    for institution in candidates:
        if url_suffix.endswith(institution.url_suffix):
            return institution
    return None


class InstitutionLogoView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request: Request, url_suffix: str) -> HttpResponse:
        institution = find_institution_for_suffix(url_suffix)
        if institution is None or not institution.logo_image:
            return HttpResponse(status=status.HTTP_204_NO_CONTENT)
        return HttpResponse(institution.logo_image, content_type="text/plain")


class PrivilegesView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request: Request) -> Response:
        return Response(
            [privilege.to_dict() for privilege in AuthorizationService.get_all_privileges()]
        )
