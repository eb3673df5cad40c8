"""
Configuration Node and Configuration Views - SEB Server Admin Backend

Endpoints:
- /configuration_node/                         Activatable entity controller endpoints
- GET /configuration_node/{id}/export/{xml|json}/   SEB configuration file of the last stable version
- /configuration/                              Read-only configuration versions
- POST /configuration/{id}/save_to_history/    New stable version from the follow-up
- POST /configuration/{id}/undo/               Reset the follow-up to the last stable version

Features:
- Node creation initialises the stable "v0" version and the follow-up
- Export logged as EXPORT activity
- History operations require MODIFY grant on the configuration

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import Callable

from django.db.models import QuerySet
from django.http import HttpResponse
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core.accounts.models import ActivityType
from core.authorization import PrivilegeType
from core.controllers import ActivatableEntityController, ReadonlyEntityController
from core.entities import EntityType
from core.filters import FilterMap

from ..models import Configuration, ConfigurationNode
from ..serializers import ConfigurationNodeSerializer, ConfigurationSerializer
from ..services import ConfigurationService, ExportFormat, ExportService


class ConfigurationNodeController(ActivatableEntityController):
    entity_type = EntityType.CONFIGURATION_NODE
    queryset = ConfigurationNode.objects.all()
    serializer_class = ConfigurationNodeSerializer
    sort_columns = {
        "name": "name",
        "description": "description",
        "type": "type",
        "status": "status",
    }
    default_sort = "name"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        for name in ("type", "status"):
            value = filter_map.get_string(name)
            if value:
                queryset = queryset.filter(**{name: value})
        template_id = filter_map.get_int("template_id")
        if template_id is not None:
            queryset = queryset.filter(template_id=template_id)
        description = filter_map.get_string("description")
        if description:
            queryset = queryset.filter(description__icontains=description)
        return queryset

    def perform_create(self, serializer) -> ConfigurationNode:
        node = serializer.save(owner=str(self.request.user.uuid))
        ConfigurationService().init_configurations(node)
        return node

    @action(detail=True, methods=["get"], url_path=r"export/(?P<export_format>xml|json)")
    def export(self, request: Request, export_format: str = "xml", *args, **kwargs) -> HttpResponse:
        node = self.check_read_access(self.load_entity(self.get_model_id()))
        target_format = ExportFormat.of(export_format)
        content = ExportService().export_node(node, target_format)
        self.activity_log.log(ActivityType.EXPORT, node, f"format: {target_format.key}")

        response = HttpResponse(content, content_type=f"{target_format.content_type}; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{node.name}.{target_format.key}"'
        return response


class ConfigurationController(ReadonlyEntityController):
    entity_type = EntityType.CONFIGURATION
    queryset = Configuration.objects.select_related("configuration_node")
    serializer_class = ConfigurationSerializer
    name_filter_field = None
    sort_columns = {"version": "version", "version_date": "version_date", "followup": "followup"}
    default_sort = "version_date"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        node_id = filter_map.get_int("configuration_node_id")
        if node_id is not None:
            queryset = queryset.filter(configuration_node_id=node_id)
        followup = filter_map.get_bool("followup")
        if followup is not None:
            queryset = queryset.filter(followup=followup)
        return queryset

    def _history_operation(self, operation: Callable[[ConfigurationNode], Configuration], label: str) -> Response:
        configuration = self.authorization.check_grant_on_entity(
            self.load_entity(self.get_model_id()), PrivilegeType.MODIFY
        )
        node = configuration.configuration_node
        followup = operation(node)
        self.activity_log.log(ActivityType.MODIFY, node, label)
        return Response(self.get_serializer(followup).data)

    @action(detail=True, methods=["post"], url_path="save_to_history")
    def save_to_history(self, request: Request, *args, **kwargs) -> Response:
        return self._history_operation(ConfigurationService().save_to_history, "save_to_history")

    @action(detail=True, methods=["post"], url_path="undo")
    def undo(self, request: Request, *args, **kwargs) -> Response:
        return self._history_operation(ConfigurationService().undo, "undo")
