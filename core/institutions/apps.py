"""
Institution Application Configuration

Registers the institution app and its bulk action support.

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class InstitutionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.institutions"
    label = "institutions"
    verbose_name = "Institutions"

    def ready(self) -> None:
        from core.accounts.activity import register_entity_serializer
        from core.bulkaction import register_bulk_action_support
        from core.entities import EntityType

        from .bulk import InstitutionBulkActionSupport
        from .serializers import InstitutionSerializer

        register_bulk_action_support(InstitutionBulkActionSupport())
        register_entity_serializer(EntityType.INSTITUTION, InstitutionSerializer)
