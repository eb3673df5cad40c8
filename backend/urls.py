"""
URL configuration of the SEB Server admin backend.

- /admin/                      Django admin (Jazzmin)
- /{ADMIN_API_ENDPOINT}/       Administration REST API
- /                            Management console
"""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path

api_prefix = f"{settings.ADMIN_API_ENDPOINT}/"

urlpatterns = [
    path("admin/", admin.site.urls),
    path(api_prefix, include("core.urls")),
    path(api_prefix, include("core.accounts.urls")),
    path(api_prefix, include("core.institutions.urls")),
    path(api_prefix, include("sebconfig.urls")),
    path(api_prefix, include("monitoring.urls")),
    path("", include("gui.urls")),
]
