from django.contrib.auth import views as auth_views
from django.urls import path

from .views import (
    AccountView,
    ActivityLogDetailView,
    ActivityLogListView,
    ConfigNodeListView,
    ExamConfigPropertiesView,
    IndexView,
)

app_name = "gui"

urlpatterns = [
    path("", IndexView.as_view(), name="index"),
    path(
        "login/",
        auth_views.LoginView.as_view(template_name="gui/login.html", redirect_authenticated_user=True),
        name="login",
    ),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("activity-logs/", ActivityLogListView.as_view(), name="activity-log-list"),
    path("activity-logs/<int:pk>/", ActivityLogDetailView.as_view(), name="activity-log-detail"),
    path("exam-configurations/", ConfigNodeListView.as_view(), name="exam-config-list"),
    path(
        "exam-configurations/<int:pk>/",
        ExamConfigPropertiesView.as_view(),
        name="exam-config-properties",
    ),
    path("account/", AccountView.as_view(), name="account"),
]
