"""
Authorization Service - SEB Server Admin Backend

Evaluates the privilege table for the roles of the current user.

Features:
- Privilege checks on entity types for an institution / owner
- Grant checks on loaded entity instances
- Queryset grant filters expressed as Django Q objects

Author: SEB Server Development Team
Version: 1.0.0
"""

from functools import reduce
from operator import or_
from typing import List, Optional, Set, TypeVar

from django.db.models import Q
from django.utils.functional import cached_property

from core.entities import EntityType, GrantEntityMixin
from core.exceptions import PermissionDeniedException

from .privileges import Privilege, PrivilegeType, UserRole, get_all_privileges, get_privilege

E = TypeVar("E", bound=GrantEntityMixin)


class AuthorizationService:
    def __init__(self, user):
        self.user = user

    @cached_property
    def roles(self) -> Set[str]:
        if not getattr(self.user, "is_authenticated", False):
            return set()
        return set(self.user.roles)

    @property
    def user_uuid(self) -> Optional[str]:
        uuid = getattr(self.user, "uuid", None)
        return str(uuid) if uuid is not None else None

    @property
    def user_institution_id(self) -> Optional[int]:
        return getattr(self.user, "institution_id", None)

    def has_role(self, role: UserRole) -> bool:
        return str(role) in self.roles

    def _privileges(self, entity_type: EntityType) -> List[Privilege]:
        return [get_privilege(entity_type, role) for role in self.roles]

    def has_base_privilege(self, entity_type: EntityType, privilege_type: PrivilegeType) -> bool:
        return any(p.has_base_privilege(privilege_type) for p in self._privileges(entity_type))

    def has_privilege(
        self,
        entity_type: EntityType,
        privilege_type: PrivilegeType,
        institution_id: Optional[int] = None,
        owner_id: Optional[str] = None,
    ) -> bool:
        for privilege in self._privileges(entity_type):
            if privilege.has_base_privilege(privilege_type):
                return True
            if (
                institution_id is not None
                and self.user_institution_id is not None
                and int(institution_id) == self.user_institution_id
                and privilege.has_institutional_privilege(privilege_type)
            ):
                return True
            if (
                owner_id is not None
                and owner_id == self.user_uuid
                and privilege.has_ownership_privilege(privilege_type)
            ):
                return True
        return False

    def check_privilege(
        self,
        entity_type: EntityType,
        privilege_type: PrivilegeType,
        institution_id: Optional[int] = None,
        include_ownership: bool = False,
    ) -> None:
        """
        Raises PermissionDeniedException unless the user holds the privilege.

        With ``include_ownership`` an ownership privilege of the requested type
        also passes; callers then narrow the result with the grant filter.
        """
        if self.has_privilege(entity_type, privilege_type, institution_id):
            return
        if include_ownership and any(
            p.has_ownership_privilege(privilege_type) for p in self._privileges(entity_type)
        ):
            return
        raise PermissionDeniedException(entity_type, privilege_type, self.user_uuid)

    def has_grant(self, entity: GrantEntityMixin, privilege_type: PrivilegeType) -> bool:
        return self.has_privilege(
            entity.entity_type,
            privilege_type,
            entity.grant_institution_id,
            entity.grant_owner_id,
        )

    def check_grant_on_entity(self, entity: E, privilege_type: PrivilegeType) -> E:
        if not self.has_grant(entity, privilege_type):
            raise PermissionDeniedException(entity.entity_type, privilege_type, self.user_uuid)
        return entity

    def get_grant_filter(
        self, entity_type: EntityType, privilege_type: PrivilegeType, model: type
    ) -> Q:
        """Q object restricting a queryset of ``model`` to the granted rows."""
        institution_field = getattr(model, "grant_institution_field", None)
        owner_field = getattr(model, "grant_owner_field", None)

        conditions = []
        for privilege in self._privileges(entity_type):
            if privilege.has_base_privilege(privilege_type):
                return Q()
            if (
                institution_field
                and self.user_institution_id is not None
                and privilege.has_institutional_privilege(privilege_type)
            ):
                conditions.append(Q(**{institution_field: self.user_institution_id}))
            if (
                owner_field
                and self.user_uuid is not None
                and privilege.has_ownership_privilege(privilege_type)
            ):
                conditions.append(Q(**{owner_field: self.user_uuid}))

        if not conditions:
            return Q(pk__in=[])
        return reduce(or_, conditions)

    def filter_granted(self, queryset, entity_type: EntityType, privilege_type: PrivilegeType):
        return queryset.filter(self.get_grant_filter(entity_type, privilege_type, queryset.model))

    @staticmethod
    def get_all_privileges() -> List[Privilege]:
        return get_all_privileges()
