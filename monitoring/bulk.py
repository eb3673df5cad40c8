"""
Bulk action support for client connections.

Connections are deleted together with their institution, their events
cascade with them.
"""

from core.bulkaction import BulkAction, BulkActionSupport
from core.entities import EntityKey, EntityType

from .models import ClientConnection


class ClientConnectionBulkActionSupport(BulkActionSupport):
    entity_type = EntityType.CLIENT_CONNECTION
    model = ClientConnection

    def get_dependencies(self, bulk_action: BulkAction):
        institution_ids = bulk_action.ids_of_type(EntityType.INSTITUTION)
        if not institution_ids:
            return set()
        return {
            EntityKey(str(pk), EntityType.CLIENT_CONNECTION)
            for pk in ClientConnection.objects.filter(
                institution_id__in=institution_ids
            ).values_list("pk", flat=True)
        }

    def process(self, action_type, key: EntityKey, user):
        ClientConnection.objects.get(pk=key.model_id).delete()
        return None
