"""
Read-only Entity Controller - SEB Server Admin Backend

Entity controller for entity types that are only read through the API.
Write requests answer with an UNSUPPORTED_OPERATION message.

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import Optional

from django.db.models import Model
from rest_framework.request import Request
from rest_framework.response import Response

from core.authorization import PrivilegeType
from core.exceptions import PermissionDeniedException, UnsupportedOperationException

from .entity import EntityController

ONLY_READ_ACCESS = "Only read requests available for this entity"


class ReadonlyEntityController(EntityController):
    def _denied(self, privilege_type: PrivilegeType):
        return PermissionDeniedException(
            self.entity_type, privilege_type, self.authorization.user_uuid
        )

    def check_create_privilege(self, institution_id: Optional[int]) -> None:
        raise self._denied(PrivilegeType.WRITE)

    def check_modify_access(self, entity: Model) -> Model:
        raise self._denied(PrivilegeType.MODIFY)

    def check_write_access(self, entity: Model) -> Model:
        raise self._denied(PrivilegeType.WRITE)

    def create(self, request: Request, *args, **kwargs) -> Response:
        raise UnsupportedOperationException(ONLY_READ_ACCESS)

    def update(self, request: Request, *args, **kwargs) -> Response:
        raise UnsupportedOperationException(ONLY_READ_ACCESS)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        raise UnsupportedOperationException(ONLY_READ_ACCESS)
