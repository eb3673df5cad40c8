from django.urls import path

from .views import InstitutionLogoView, PrivilegesView

app_name = "core"

urlpatterns = [
    path("info/logo/<str:url_suffix>/", InstitutionLogoView.as_view(), name="info-logo"),
    path("info/privileges/", PrivilegesView.as_view(), name="info-privileges"),
]
