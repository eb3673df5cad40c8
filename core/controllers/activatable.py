"""
Activatable Entity Controller - SEB Server Admin Backend

Entity controller for entity types carrying an active flag.

Endpoints:
- POST /{resource}/{id}/active/     Activate (bulk action report)
- POST /{resource}/{id}/inactive/   Deactivate, dependants included (bulk action report)

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db.models import QuerySet
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core.bulkaction import BulkActionType
from core.filters import FilterMap

from .entity import EntityController


class ActivatableEntityController(EntityController):
    active_field: str = "active"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        if filter_map.active is not None:
            queryset = queryset.filter(**{self.active_field: filter_map.active})
        return queryset

    @action(detail=True, methods=["post"], url_path="active")
    def activate(self, request: Request, *args, **kwargs) -> Response:
        entity = self.check_write_access(self.load_entity(self.get_model_id()))
        return self.create_report(BulkActionType.ACTIVATE, entity)

    @action(detail=True, methods=["post"], url_path="inactive")
    def deactivate(self, request: Request, *args, **kwargs) -> Response:
        entity = self.check_write_access(self.load_entity(self.get_model_id()))
        return self.create_report(BulkActionType.DEACTIVATE, entity)
