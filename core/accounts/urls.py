from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import (
    LogoutView,
    SEBTokenObtainPairView,
    SEBTokenRefreshView,
    UserAccountController,
    UserActivityLogController,
)

app_name = "accounts"

router = DefaultRouter()
router.register(r"useraccount", UserAccountController, basename="useraccount")
router.register(r"useractivity", UserActivityLogController, basename="useractivity")

urlpatterns = [
    path("token/", SEBTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", SEBTokenRefreshView.as_view(), name="token_refresh"),
    path("logout/", LogoutView.as_view(), name="logout"),
] + router.urls
