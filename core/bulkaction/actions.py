"""
Bulk Action Types and Support Registry - SEB Server Admin Backend

A bulk action applies one operation (hard delete, activation, deactivation)
to a set of source entities and everything that depends on them. Each entity
type contributes a BulkActionSupport that knows its dependencies and how to
process one of its own keys; apps register their supports in
``AppConfig.ready()``.

Author: SEB Server Development Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from core.entities import EntityKey, EntityType, ErrorEntry


class BulkActionType(Enum):
    HARD_DELETE = "DELETE"
    DEACTIVATE = "DEACTIVATE"
    ACTIVATE = "ACTIVATE"

    @property
    def activity_type(self) -> str:
        return self.value


# Processing order per action type, dependants first for deletions
PROCESSING_ORDER: Dict[BulkActionType, List[EntityType]] = {
    BulkActionType.HARD_DELETE: [
        EntityType.CLIENT_EVENT,
        EntityType.CLIENT_CONNECTION,
        EntityType.CONFIGURATION_VALUE,
        EntityType.CONFIGURATION,
        EntityType.CONFIGURATION_NODE,
        EntityType.ORIENTATION,
        EntityType.VIEW,
        EntityType.CONFIGURATION_ATTRIBUTE,
        EntityType.USER_ACTIVITY_LOG,
        EntityType.USER,
        EntityType.INSTITUTION,
    ],
    BulkActionType.DEACTIVATE: [
        EntityType.CONFIGURATION_NODE,
        EntityType.USER,
        EntityType.INSTITUTION,
    ],
    BulkActionType.ACTIVATE: [
        EntityType.INSTITUTION,
        EntityType.USER,
        EntityType.CONFIGURATION_NODE,
    ],
}


@dataclass
class BulkAction:
    type: BulkActionType
    source_entity_type: EntityType
    sources: Set[EntityKey]
    dependencies: Set[EntityKey] = field(default_factory=set)
    rejected: Set[EntityKey] = field(default_factory=set)
    results: Set[EntityKey] = field(default_factory=set)
    errors: List[ErrorEntry] = field(default_factory=list)

    @property
    def all_keys(self) -> Set[EntityKey]:
        return (self.sources - self.rejected) | self.dependencies

    def keys_of_type(self, entity_type: EntityType) -> List[EntityKey]:
        return sorted(
            (key for key in self.all_keys if key.entity_type == entity_type),
            key=lambda key: key.model_id,
        )

    def ids_of_type(self, entity_type: EntityType) -> List[str]:
        return [key.model_id for key in self.keys_of_type(entity_type)]


class BulkActionSupport:
    """
    Per entity type processing for bulk actions.

    Subclasses set ``entity_type``, ``supported_actions`` and ``model`` and
    implement ``process``, which returns the updated entity or None after a
    deletion. ``get_dependencies`` returns keys of this support's own type
    that depend on keys already in the action.
    """

    entity_type: EntityType = None
    supported_actions: Iterable[BulkActionType] = (BulkActionType.HARD_DELETE,)
    model = None
    lookup_field = "pk"

    def validate(self, action_type: BulkActionType, key: EntityKey, user) -> None:
        """Pre-check a source key. Raise an APIMessageException to reject it."""

    def get_dependencies(self, bulk_action: BulkAction) -> Set[EntityKey]:
        return set()

    def load(self, key: EntityKey):
        """The entity of a key or None when it is already gone."""
        return self.model.objects.filter(**{self.lookup_field: key.model_id}).first()

    def process(self, action_type: BulkActionType, key: EntityKey, user) -> Optional[object]:
        raise NotImplementedError


_registry: Dict[EntityType, BulkActionSupport] = {}


def register_bulk_action_support(support: BulkActionSupport) -> None:
    _registry[support.entity_type] = support


def get_bulk_action_support(entity_type: EntityType) -> Optional[BulkActionSupport]:
    return _registry.get(entity_type)


def get_bulk_action_supports() -> List[BulkActionSupport]:
    return list(_registry.values())
