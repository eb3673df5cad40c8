from .auth_views import LogoutView, SEBTokenObtainPairView, SEBTokenRefreshView
from .user_views import UserAccountController, UserActivityLogController

__all__ = [
    "LogoutView",
    "SEBTokenObtainPairView",
    "SEBTokenRefreshView",
    "UserAccountController",
    "UserActivityLogController",
]
