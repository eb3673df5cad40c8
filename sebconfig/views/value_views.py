"""
Configuration Value Views - SEB Server Admin Backend

Endpoints:
- /configuration_value/                 Entity controller endpoints for values
- GET /configuration_value/table/       Ordered rows of a table attribute
                                        (?configuration_id=&attribute_id=)

Values can only be created, modified and deleted on the follow-up
configuration of a node.

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db.models import QuerySet
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core.authorization import PrivilegeType
from core.controllers import EntityController
from core.entities import EntityType
from core.exceptions import IllegalAPIArgumentException, ResourceNotFoundException
from core.filters import FilterMap

from ..models import Configuration, ConfigurationAttribute, ConfigurationValue
from ..serializers import ConfigurationValueSerializer
from ..services import ConfigurationService


class ConfigurationValueController(EntityController):
    entity_type = EntityType.CONFIGURATION_VALUE
    queryset = ConfigurationValue.objects.select_related("attribute", "configuration")
    serializer_class = ConfigurationValueSerializer
    name_filter_field = None
    sort_columns = {"attribute": "attribute__name", "list_index": "list_index"}
    default_sort = "attribute"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        configuration_id = filter_map.get_int("configuration_id")
        if configuration_id is not None:
            queryset = queryset.filter(configuration_id=configuration_id)
        attribute_id = filter_map.get_int("attribute_id")
        if attribute_id is not None:
            queryset = queryset.filter(attribute_id=attribute_id)
        return queryset

    def valid_for_save(self, serializer, instance) -> None:
        configuration = serializer.validated_data.get("configuration") or instance.configuration
        self.authorization.check_grant_on_entity(configuration, PrivilegeType.MODIFY)

    def _required_id(self, name: str) -> int:
        value = self.request.query_params.get(name)
        if not value:
            raise IllegalAPIArgumentException(f"Missing request parameter: {name}")
        try:
            return int(value)
        except ValueError:
            raise IllegalAPIArgumentException(f"Invalid {name}: {value}")

    @action(detail=False, methods=["get"], url_path="table")
    def table(self, request: Request, *args, **kwargs) -> Response:
        configuration_id = self._required_id("configuration_id")
        attribute_id = self._required_id("attribute_id")

        configuration = Configuration.objects.filter(pk=configuration_id).first()
        if configuration is None:
            raise ResourceNotFoundException(EntityType.CONFIGURATION, configuration_id)
        self.authorization.check_grant_on_entity(configuration, PrivilegeType.READ_ONLY)

        attribute = ConfigurationAttribute.objects.filter(pk=attribute_id).first()
        if attribute is None:
            raise ResourceNotFoundException(EntityType.CONFIGURATION_ATTRIBUTE, attribute_id)
        if not attribute.is_table:
            raise IllegalAPIArgumentException(f"Attribute is not a table: {attribute.name}")

        rows = ConfigurationService().get_ordered_table_values(configuration, attribute)
        return Response([self.get_serializer(row, many=True).data for row in rows])
