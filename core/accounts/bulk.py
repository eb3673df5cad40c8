"""
Bulk action support for user accounts.

Users depend on their institution. The account of the requesting user can
neither be deleted nor deactivated, and users of an inactive institution
cannot be activated.
"""

from core.bulkaction import BulkAction, BulkActionSupport, BulkActionType
from core.entities import EntityKey, EntityType
from core.exceptions import APIMessageException, ErrorMessage

from .models import UserAccount


class UserAccountBulkActionSupport(BulkActionSupport):
    entity_type = EntityType.USER
    supported_actions = (
        BulkActionType.HARD_DELETE,
        BulkActionType.DEACTIVATE,
        BulkActionType.ACTIVATE,
    )
    model = UserAccount
    lookup_field = "uuid"

    def validate(self, action_type: BulkActionType, key: EntityKey, user) -> None:
        if action_type is not BulkActionType.ACTIVATE and key.model_id == str(
            getattr(user, "uuid", "")
        ):
            raise APIMessageException(
                ErrorMessage.INTEGRITY_VALIDATION,
                "The account of the current user cannot be deleted or deactivated",
                key.model_id,
            )

    def get_dependencies(self, bulk_action: BulkAction):
        institution_ids = bulk_action.ids_of_type(EntityType.INSTITUTION)
        if not institution_ids:
            return set()
        return {
            EntityKey(str(uuid), EntityType.USER)
            for uuid in UserAccount.objects.filter(
                institution_id__in=institution_ids
            ).values_list("uuid", flat=True)
        }

    def process(self, action_type: BulkActionType, key: EntityKey, user):
        account = UserAccount.objects.select_related("institution").get(uuid=key.model_id)
        if action_type is BulkActionType.HARD_DELETE:
            account.delete()
            return None
        if action_type is BulkActionType.ACTIVATE and (
            account.institution is None or not account.institution.active
        ):
            raise APIMessageException(
                ErrorMessage.INTEGRITY_VALIDATION,
                "User within an inactive institution cannot be activated",
                key.model_id,
            )
        account.is_active = action_type is BulkActionType.ACTIVATE
        account.save(update_fields=["is_active"])
        return account
