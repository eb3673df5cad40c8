"""
User Account Models - SEB Server Admin Backend

This module defines the administrative user accounts, their role
assignments and the activity log recording every change they make.

Models:
- UserAccount: Custom user model bound to an institution, addressed by UUID
- UserRoleAssignment: One role of a user account
- UserActivityLog: Audit record of a user action on an entity

Author: SEB Server Development Team
Version: 1.0.0
"""

import uuid
from typing import List

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.authorization.privileges import UserRole
from core.entities import EntityType, GrantEntityMixin
from core.institutions.models import Institution


class ActivityType(models.TextChoices):
    CREATE = "CREATE", _("Create")
    IMPORT = "IMPORT", _("Import")
    EXPORT = "EXPORT", _("Export")
    MODIFY = "MODIFY", _("Modify")
    PASSWORD_CHANGE = "PASSWORD_CHANGE", _("Password Change")
    DEACTIVATE = "DEACTIVATE", _("Deactivate")
    ACTIVATE = "ACTIVATE", _("Activate")
    ARCHIVE = "ARCHIVE", _("Archive")
    DELETE = "DELETE", _("Delete")


class UserAccountManager(UserManager):
    def get_queryset(self):
        return super().get_queryset().prefetch_related("role_assignments")


class UserAccount(GrantEntityMixin, AbstractUser):
    """
    Administrative user account.

    ``first_name``/``last_name`` of the Django user hold name and surname;
    ``is_active`` is the activation flag managed by the activatable controller.
    """

    entity_type = EntityType.USER
    grant_owner_field = "uuid"
    model_id_field = "uuid"

    uuid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    institution = models.ForeignKey(
        Institution,
        on_delete=models.CASCADE,
        related_name="users",
        null=True,
        blank=True,
    )
    language = models.CharField(_("Language"), max_length=10, default="en")
    timezone = models.CharField(_("Time zone"), max_length=64, default="UTC")
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserAccountManager()

    class Meta:
        ordering = ["username"]
        verbose_name = _("User Account")
        verbose_name_plural = _("User Accounts")

    def __str__(self):
        return self.username

    @property
    def entity_name(self) -> str:
        full_name = self.get_full_name()
        return f"{full_name} ({self.username})" if full_name else self.username

    @property
    def active(self) -> bool:
        return self.is_active

    @property
    def roles(self) -> List[str]:
        return sorted(assignment.role_name for assignment in self.role_assignments.all())

    def set_roles(self, roles) -> None:
        self.role_assignments.exclude(role_name__in=roles).delete()
        existing = set(self.role_assignments.values_list("role_name", flat=True))
        UserRoleAssignment.objects.bulk_create(
            UserRoleAssignment(user=self, role_name=role)
            for role in roles
            if role not in existing
        )
        # role_assignments may be prefetched
        if hasattr(self, "_prefetched_objects_cache"):
            self._prefetched_objects_cache.pop("role_assignments", None)


class UserRoleAssignment(models.Model):
    user = models.ForeignKey(
        UserAccount, on_delete=models.CASCADE, related_name="role_assignments"
    )
    role_name = models.CharField(max_length=32, choices=UserRole.choices)

    class Meta:
        db_table = "user_role"
        unique_together = ("user", "role_name")
        verbose_name = _("User Role")
        verbose_name_plural = _("User Roles")

    def __str__(self):
        return f"{self.user.username}: {self.role_name}"


class UserActivityLog(GrantEntityMixin, models.Model):
    entity_type = EntityType.USER_ACTIVITY_LOG
    grant_institution_field = "user__institution_id"
    grant_owner_field = "user__uuid"

    user = models.ForeignKey(
        UserAccount,
        to_field="uuid",
        db_column="user_uuid",
        on_delete=models.CASCADE,
        related_name="activity_logs",
    )
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    activity_type = models.CharField(max_length=32, choices=ActivityType.choices)
    entity_type_name = models.CharField(
        "entity type", db_column="entity_type", max_length=32, choices=EntityType.choices
    )
    entity_id = models.CharField(max_length=255)
    message = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["-timestamp"]
        verbose_name = _("User Activity Log")
        verbose_name_plural = _("User Activity Logs")

    def __str__(self):
        return f"{self.activity_type} {self.entity_type_name}:{self.entity_id}"
