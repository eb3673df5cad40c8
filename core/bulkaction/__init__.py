from .actions import (
    BulkAction,
    BulkActionSupport,
    BulkActionType,
    register_bulk_action_support,
)
from .service import BulkActionService

__all__ = [
    "BulkAction",
    "BulkActionService",
    "BulkActionSupport",
    "BulkActionType",
    "register_bulk_action_support",
]
