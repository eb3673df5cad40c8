"""
Entity Model Primitives - SEB Server Admin Backend

This module defines the entity vocabulary shared by every administrative
resource: the entity types, the keys and names used to address entities and
the processing report returned by bulk actions.

Features:
- EntityType catalogue of all administrable resources
- EntityKey / EntityName value objects with JSON representations
- GrantEntityMixin giving models the institution/owner grant contract
- EntityProcessingReport collecting results and errors of bulk actions

Author: SEB Server Development Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from django.db import models


class EntityType(models.TextChoices):
    INSTITUTION = "INSTITUTION", "Institution"
    USER = "USER", "User Account"
    USER_ACTIVITY_LOG = "USER_ACTIVITY_LOG", "User Activity Log"
    CONFIGURATION_NODE = "CONFIGURATION_NODE", "Configuration Node"
    CONFIGURATION = "CONFIGURATION", "Configuration"
    CONFIGURATION_VALUE = "CONFIGURATION_VALUE", "Configuration Value"
    CONFIGURATION_ATTRIBUTE = "CONFIGURATION_ATTRIBUTE", "Configuration Attribute"
    VIEW = "VIEW", "View"
    ORIENTATION = "ORIENTATION", "Orientation"
    CLIENT_CONNECTION = "CLIENT_CONNECTION", "Client Connection"
    CLIENT_EVENT = "CLIENT_EVENT", "Client Event"


@dataclass(frozen=True)
class EntityKey:
    """Addresses one entity by its model id and type."""

    model_id: str
    entity_type: EntityType

    def to_dict(self) -> Dict[str, str]:
        return {"model_id": self.model_id, "entity_type": str(self.entity_type)}


@dataclass(frozen=True)
class EntityName:
    model_id: str
    entity_type: EntityType
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "model_id": self.model_id,
            "entity_type": str(self.entity_type),
            "name": self.name,
        }


@dataclass
class ErrorEntry:
    entity_key: EntityKey
    error_message: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity_key": self.entity_key.to_dict(),
            "error_message": self.error_message.to_dict(),
        }


@dataclass
class EntityProcessingReport:
    """
    Outcome of a bulk action.

    Attributes:
        source: Keys the action was requested for
        results: Keys that were processed successfully (sources and dependencies)
        errors: One entry per key that could not be processed
    """

    source: Set[EntityKey] = field(default_factory=set)
    results: Set[EntityKey] = field(default_factory=set)
    errors: List[ErrorEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": [key.to_dict() for key in _sorted_keys(self.source)],
            "results": [key.to_dict() for key in _sorted_keys(self.results)],
            "errors": [error.to_dict() for error in self.errors],
        }


def _sorted_keys(keys: Set[EntityKey]) -> List[EntityKey]:
    return sorted(keys, key=lambda key: (str(key.entity_type), key.model_id))


def resolve_path(instance: Any, path: Optional[str]) -> Any:
    """Follows a Django style ``a__b`` attribute path on an instance."""
    if not path:
        return None
    value = instance
    for part in path.split("__"):
        if value is None:
            return None
        value = getattr(value, part)
    return value


class GrantEntityMixin:
    """
    Grant contract for administrable models.

    ``grant_institution_field`` and ``grant_owner_field`` are ORM lookup paths
    used both for instance checks and for queryset grant filters. Global
    entities leave the institution path empty.
    """

    entity_type: EntityType = None
    grant_institution_field: Optional[str] = "institution_id"
    grant_owner_field: Optional[str] = None
    model_id_field: str = "pk"

    @property
    def model_id(self) -> str:
        return str(getattr(self, self.model_id_field))

    @property
    def entity_key(self) -> EntityKey:
        return EntityKey(self.model_id, self.entity_type)

    @property
    def grant_institution_id(self) -> Optional[int]:
        return resolve_path(self, self.grant_institution_field)

    @property
    def grant_owner_id(self) -> Optional[str]:
        owner = resolve_path(self, self.grant_owner_field)
        return str(owner) if owner is not None else None

    @property
    def entity_name(self) -> str:
        return str(self)

    def to_name(self) -> EntityName:
        return EntityName(self.model_id, self.entity_type, self.entity_name)
