"""
User Account Application Configuration

Registers the account app (custom user model, roles, activity logs) and its
bulk action support.

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.accounts"
    label = "accounts"
    verbose_name = "User Accounts"

    def ready(self) -> None:
        from core.bulkaction import register_bulk_action_support
        from core.entities import EntityType

        from .activity import register_entity_serializer
        from .bulk import UserAccountBulkActionSupport
        from .serializers import UserAccountSerializer

        register_bulk_action_support(UserAccountBulkActionSupport())
        register_entity_serializer(EntityType.USER, UserAccountSerializer)
