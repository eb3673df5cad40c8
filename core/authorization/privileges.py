"""
Privilege Definitions - SEB Server Admin Backend

Static role based privilege table. Every user role gets, per entity type, a
base privilege (all entities), an institutional privilege (entities of the
user's own institution) and an ownership privilege (entities owned by the
user).

Author: SEB Server Development Team
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from django.db import models

from core.entities import EntityType


class PrivilegeType(Enum):
    NONE = 0
    READ_ONLY = 1
    MODIFY = 2
    WRITE = 3

    def has_implicit(self, other: "PrivilegeType") -> bool:
        """True if this privilege includes ``other`` (WRITE > MODIFY > READ_ONLY)."""
        if other is PrivilegeType.NONE:
            return True
        return self.value >= other.value

    def __str__(self) -> str:
        return self.name


class UserRole(models.TextChoices):
    SEB_SERVER_ADMIN = "SEB_SERVER_ADMIN", "SEB Server Administrator"
    INSTITUTIONAL_ADMIN = "INSTITUTIONAL_ADMIN", "Institutional Administrator"
    EXAM_ADMIN = "EXAM_ADMIN", "Exam Administrator"
    EXAM_SUPPORTER = "EXAM_SUPPORTER", "Exam Supporter"


@dataclass(frozen=True)
class Privilege:
    entity_type: EntityType
    role: UserRole
    base_privilege: PrivilegeType = PrivilegeType.NONE
    institutional_privilege: PrivilegeType = PrivilegeType.NONE
    ownership_privilege: PrivilegeType = PrivilegeType.NONE

    def has_base_privilege(self, privilege_type: PrivilegeType) -> bool:
        return self.base_privilege.has_implicit(privilege_type)

    def has_institutional_privilege(self, privilege_type: PrivilegeType) -> bool:
        return self.institutional_privilege.has_implicit(privilege_type)

    def has_ownership_privilege(self, privilege_type: PrivilegeType) -> bool:
        return self.ownership_privilege.has_implicit(privilege_type)

    def to_dict(self) -> Dict[str, str]:
        return {
            "entity_type": str(self.entity_type),
            "role": str(self.role),
            "base_privilege": str(self.base_privilege),
            "institutional_privilege": str(self.institutional_privilege),
            "ownership_privilege": str(self.ownership_privilege),
        }


R = PrivilegeType.READ_ONLY
M = PrivilegeType.MODIFY
W = PrivilegeType.WRITE
N = PrivilegeType.NONE

ADMIN = UserRole.SEB_SERVER_ADMIN
INST_ADMIN = UserRole.INSTITUTIONAL_ADMIN
EXAM_ADMIN = UserRole.EXAM_ADMIN
SUPPORTER = UserRole.EXAM_SUPPORTER

# (base, institutional, ownership) per role
_TABLE: Dict[Tuple[EntityType, ...], Dict[UserRole, Tuple[PrivilegeType, PrivilegeType, PrivilegeType]]] = {
    (EntityType.INSTITUTION,): {
        ADMIN: (W, N, N),
        INST_ADMIN: (N, M, N),
        EXAM_ADMIN: (N, R, N),
        SUPPORTER: (N, R, N),
    },
    (EntityType.USER,): {
        ADMIN: (W, N, N),
        INST_ADMIN: (N, W, N),
        EXAM_ADMIN: (N, N, M),
        SUPPORTER: (N, N, M),
    },
    (EntityType.USER_ACTIVITY_LOG,): {
        ADMIN: (R, N, N),
        INST_ADMIN: (N, R, N),
        EXAM_ADMIN: (N, N, R),
        SUPPORTER: (N, N, R),
    },
    (
        EntityType.CONFIGURATION_NODE,
        EntityType.CONFIGURATION,
        EntityType.CONFIGURATION_VALUE,
    ): {
        ADMIN: (R, W, N),
        INST_ADMIN: (N, W, N),
        EXAM_ADMIN: (N, W, N),
        SUPPORTER: (N, R, M),
    },
    (
        EntityType.CONFIGURATION_ATTRIBUTE,
        EntityType.VIEW,
        EntityType.ORIENTATION,
    ): {
        ADMIN: (W, N, N),
        INST_ADMIN: (R, N, N),
        EXAM_ADMIN: (R, N, N),
        SUPPORTER: (R, N, N),
    },
    (EntityType.CLIENT_CONNECTION, EntityType.CLIENT_EVENT): {
        ADMIN: (R, N, N),
        INST_ADMIN: (N, R, N),
        EXAM_ADMIN: (N, R, N),
        SUPPORTER: (N, R, N),
    },
}


def _build_privileges() -> Dict[Tuple[EntityType, UserRole], Privilege]:
    privileges = {}
    for entity_types, roles in _TABLE.items():
        for entity_type in entity_types:
            for role, (base, institutional, ownership) in roles.items():
                privileges[(entity_type, role)] = Privilege(
                    entity_type, role, base, institutional, ownership
                )
    return privileges


PRIVILEGES: Dict[Tuple[EntityType, UserRole], Privilege] = _build_privileges()


def get_privilege(entity_type: EntityType, role: str) -> Privilege:
    return PRIVILEGES.get(
        (EntityType(entity_type), UserRole(role)),
        Privilege(EntityType(entity_type), UserRole(role)),
    )


def get_all_privileges() -> List[Privilege]:
    return list(PRIVILEGES.values())
