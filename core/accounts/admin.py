"""
User Account Django Admin Configuration

Admin interface for user accounts with inline role editing and a read-only
view of the activity log.

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import Optional

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .models import UserAccount, UserActivityLog, UserRoleAssignment


class UserRoleInline(admin.TabularInline):
    model = UserRoleAssignment
    extra = 0
    verbose_name_plural = "Roles"


@admin.register(UserAccount)
class UserAccountAdmin(BaseUserAdmin):
    """
    User account administration.

    Extends Django's UserAdmin with institution, locale settings and the
    role assignments of the account.
    """

    inlines = (UserRoleInline,)
    list_display = ("username", "email", "first_name", "last_name", "institution", "is_active")
    list_filter = ("is_active", "institution", "role_assignments__role_name")
    search_fields = ("username", "first_name", "last_name", "email", "uuid")
    readonly_fields = ("uuid", "created_at", "last_login", "date_joined")
    fieldsets = BaseUserAdmin.fieldsets + (
        (_("SEB Server"), {"fields": ("uuid", "institution", "language", "timezone", "created_at")}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        (_("SEB Server"), {"fields": ("institution", "language", "timezone")}),
    )


@admin.register(UserActivityLog)
class UserActivityLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "user", "activity_type", "entity_type_name", "entity_id")
    list_filter = ("activity_type", "entity_type_name", "timestamp")
    search_fields = ("user__username", "entity_id", "message")
    readonly_fields = (
        "user",
        "timestamp",
        "activity_type",
        "entity_type_name",
        "entity_id",
        "message",
    )
    date_hierarchy = "timestamp"

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj: Optional[UserActivityLog] = None) -> bool:
        return False
