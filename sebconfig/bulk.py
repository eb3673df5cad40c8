"""
Bulk action supports for exam configurations.

Configuration nodes follow their institution on deletion, deactivation and
activation. Values can only be deleted from a follow-up configuration and
attributes are deleted together with their table children.
"""

from core.bulkaction import BulkAction, BulkActionSupport, BulkActionType
from core.entities import EntityKey, EntityType
from core.exceptions import APIMessageException, ErrorMessage

from .models import ConfigurationAttribute, ConfigurationNode, ConfigurationValue
from .services.configuration_service import FOLLOWUP_ONLY


class ConfigurationNodeBulkActionSupport(BulkActionSupport):
    entity_type = EntityType.CONFIGURATION_NODE
    supported_actions = (
        BulkActionType.HARD_DELETE,
        BulkActionType.DEACTIVATE,
        BulkActionType.ACTIVATE,
    )
    model = ConfigurationNode

    def get_dependencies(self, bulk_action: BulkAction):
        institution_ids = bulk_action.ids_of_type(EntityType.INSTITUTION)
        if not institution_ids:
            return set()
        return {
            EntityKey(str(pk), EntityType.CONFIGURATION_NODE)
            for pk in ConfigurationNode.objects.filter(
                institution_id__in=institution_ids
            ).values_list("pk", flat=True)
        }

    def process(self, action_type: BulkActionType, key: EntityKey, user):
        node = ConfigurationNode.objects.select_related("institution").get(pk=key.model_id)
        if action_type is BulkActionType.HARD_DELETE:
            node.delete()
            return None
        if action_type is BulkActionType.ACTIVATE and not node.institution.active:
            raise APIMessageException(
                ErrorMessage.INTEGRITY_VALIDATION,
                "Configuration within an inactive institution cannot be activated",
                key.model_id,
            )
        node.active = action_type is BulkActionType.ACTIVATE
        node.save(update_fields=["active", "updated_at"])
        return node


class ConfigurationValueBulkActionSupport(BulkActionSupport):
    entity_type = EntityType.CONFIGURATION_VALUE
    model = ConfigurationValue

    def validate(self, action_type: BulkActionType, key: EntityKey, user) -> None:
        if not ConfigurationValue.objects.filter(
            pk=key.model_id, configuration__followup=True
        ).exists():
            raise APIMessageException(
                ErrorMessage.ILLEGAL_API_ARGUMENT, FOLLOWUP_ONLY, key.model_id
            )

    def process(self, action_type: BulkActionType, key: EntityKey, user):
        ConfigurationValue.objects.get(pk=key.model_id).delete()
        return None


class ConfigurationAttributeBulkActionSupport(BulkActionSupport):
    entity_type = EntityType.CONFIGURATION_ATTRIBUTE
    model = ConfigurationAttribute

    def get_dependencies(self, bulk_action: BulkAction):
        parent_ids = bulk_action.ids_of_type(EntityType.CONFIGURATION_ATTRIBUTE)
        if not parent_ids:
            return set()
        return {
            EntityKey(str(pk), EntityType.CONFIGURATION_ATTRIBUTE)
            for pk in ConfigurationAttribute.objects.filter(
                parent_id__in=parent_ids
            ).values_list("pk", flat=True)
        }

    def process(self, action_type: BulkActionType, key: EntityKey, user):
        # children may already be gone with their parent
        ConfigurationAttribute.objects.filter(pk=key.model_id).delete()
        return None
