"""
Configuration Attribute, View and Orientation Views - SEB Server Admin Backend

Endpoints:
- /configuration_attribute/   Entity controller endpoints for the attribute catalogue
- /view/                      Read-only editor views
- /orientation/               Read-only attribute orientations

The attribute catalogue is global; only SEB Server administrators write it.

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db.models import QuerySet

from core.controllers import EntityController, ReadonlyEntityController
from core.entities import EntityType
from core.filters import FilterMap

from ..models import ConfigurationAttribute, Orientation, View
from ..serializers import (
    ConfigurationAttributeSerializer,
    OrientationSerializer,
    ViewSerializer,
)


class ConfigurationAttributeController(EntityController):
    entity_type = EntityType.CONFIGURATION_ATTRIBUTE
    queryset = ConfigurationAttribute.objects.select_related("parent")
    serializer_class = ConfigurationAttributeSerializer
    filter_by_institution = False
    sort_columns = {"name": "name", "type": "type"}
    default_sort = "name"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        attribute_type = filter_map.get_string("type")
        if attribute_type:
            queryset = queryset.filter(type=attribute_type)
        parent_id = filter_map.get_int("parent_id")
        if parent_id is not None:
            queryset = queryset.filter(parent_id=parent_id)
        return queryset


class ViewController(ReadonlyEntityController):
    entity_type = EntityType.VIEW
    queryset = View.objects.all()
    serializer_class = ViewSerializer
    filter_by_institution = False
    sort_columns = {"name": "name", "position": "position"}
    default_sort = "position"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        template_id = filter_map.get_int("template_id")
        if template_id is not None:
            queryset = queryset.filter(template_id=template_id)
        return queryset


class OrientationController(ReadonlyEntityController):
    entity_type = EntityType.ORIENTATION
    queryset = Orientation.objects.select_related("attribute", "view")
    serializer_class = OrientationSerializer
    filter_by_institution = False
    name_filter_field = "attribute__name__icontains"
    sort_columns = {"attribute": "attribute__name", "view": "view__position", "y_position": "y_position"}
    default_sort = "y_position"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        for name in ("template_id", "view_id"):
            value = filter_map.get_int(name)
            if value is not None:
                queryset = queryset.filter(**{name: value})
        return queryset
