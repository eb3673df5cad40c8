"""
Monitoring Application Configuration

Registers the monitoring app and its bulk action support.

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class MonitoringConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "monitoring"
    verbose_name = "Monitoring"

    def ready(self) -> None:
        from core.accounts.activity import register_entity_serializer
        from core.bulkaction import register_bulk_action_support
        from core.entities import EntityType

        from .bulk import ClientConnectionBulkActionSupport
        from .serializers import ClientConnectionSerializer, ClientEventSerializer

        register_bulk_action_support(ClientConnectionBulkActionSupport())
        register_entity_serializer(EntityType.CLIENT_CONNECTION, ClientConnectionSerializer)
        register_entity_serializer(EntityType.CLIENT_EVENT, ClientEventSerializer)
