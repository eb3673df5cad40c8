"""
Bulk action support for institutions.

Deactivation and deletion of an institution extend to its users,
configuration nodes and (deletion only) client connections, each collected
by the support of the dependent type.
"""

from core.bulkaction import BulkActionSupport, BulkActionType
from core.entities import EntityKey, EntityType
from core.exceptions import APIMessageException, ErrorMessage

from .models import Institution


class InstitutionBulkActionSupport(BulkActionSupport):
    entity_type = EntityType.INSTITUTION
    supported_actions = (
        BulkActionType.HARD_DELETE,
        BulkActionType.DEACTIVATE,
        BulkActionType.ACTIVATE,
    )
    model = Institution

    def validate(self, action_type: BulkActionType, key: EntityKey, user) -> None:
        if action_type is BulkActionType.ACTIVATE:
            return
        if str(getattr(user, "institution_id", None)) == key.model_id:
            raise APIMessageException(
                ErrorMessage.INTEGRITY_VALIDATION,
                "The institution of the current user cannot be deleted or deactivated",
                key.model_id,
            )

    def process(self, action_type: BulkActionType, key: EntityKey, user):
        institution = Institution.objects.get(pk=key.model_id)
        if action_type is BulkActionType.HARD_DELETE:
            institution.delete()
            return None
        institution.active = action_type is BulkActionType.ACTIVATE
        institution.save(update_fields=["active", "updated_at"])
        return institution
