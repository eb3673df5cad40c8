"""
Entity Controller - SEB Server Admin Backend

Generic REST controller shared by all administrable entity types. Concrete
controllers set the entity type, queryset, serializer and sort columns and
override the filter / validation hooks where needed.

Endpoints (per registered resource):
- GET    /{resource}/                 Paged list, filtered and grant restricted
- GET    /{resource}/names/           Entity names of the filtered list
- GET    /{resource}/{id}/            Single entity
- GET    /{resource}/list/?ids=a,b    Entities for ids, readable ones only
- POST   /{resource}/                 Create
- PUT    /{resource}/{id}/            Modify
- DELETE /{resource}/{id}/            Hard delete via bulk action report

Features:
- Privilege checks before listing and creating
- Grant checks on every loaded entity
- Activity logging of create and modify
- Hooks for filtering, validation and post save notification

Author: SEB Server Development Team
Version: 1.0.0
"""

from typing import Any, Dict, List, Optional

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Model, QuerySet
from django.utils.functional import cached_property
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core.accounts.activity import UserActivityLogService
from core.accounts.models import ActivityType
from core.authorization import AuthorizationService, PrivilegeType
from core.bulkaction import BulkAction, BulkActionService, BulkActionType
from core.entities import EntityType
from core.exceptions import IllegalAPIArgumentException, ResourceNotFoundException
from core.filters import INSTITUTION_ID, FilterMap
from core.pagination import PaginationService
from core.utils import get_list_from_string

PARAM_MODEL_ID_LIST = "ids"


def parse_institution_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise IllegalAPIArgumentException(f"Invalid institution id: {value}")


class EntityController(viewsets.GenericViewSet):
    entity_type: EntityType = None
    sort_columns: Dict[str, str] = {}
    default_sort: Optional[str] = None
    # Lists are restricted to the requested (or the user's) institution
    filter_by_institution: bool = True
    name_filter_field: Optional[str] = "name__icontains"
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    @cached_property
    def authorization(self) -> AuthorizationService:
        return AuthorizationService(self.request.user)

    @cached_property
    def activity_log(self) -> UserActivityLogService:
        return UserActivityLogService(self.request.user)

    @cached_property
    def pagination_service(self) -> PaginationService:
        return PaginationService()

    @cached_property
    def bulk_action_service(self) -> BulkActionService:
        return BulkActionService(self.request.user)

    # -- hooks --------------------------------------------------------------

    def get_institution_id(self) -> Optional[int]:
        value = parse_institution_id(self.request.query_params.get(INSTITUTION_ID))
        if value is not None:
            return value
        return getattr(self.request.user, "institution_id", None)

    def check_read_privilege(self, institution_id: Optional[int]) -> None:
        self.authorization.check_privilege(
            self.entity_type, PrivilegeType.READ_ONLY, institution_id, include_ownership=True
        )

    def check_create_privilege(self, institution_id: Optional[int]) -> None:
        self.authorization.check_privilege(self.entity_type, PrivilegeType.WRITE, institution_id)

    def check_read_access(self, entity: Model) -> Model:
        return self.authorization.check_grant_on_entity(entity, PrivilegeType.READ_ONLY)

    def check_modify_access(self, entity: Model) -> Model:
        return self.authorization.check_grant_on_entity(entity, PrivilegeType.MODIFY)

    def check_write_access(self, entity: Model) -> Model:
        return self.authorization.check_grant_on_entity(entity, PrivilegeType.WRITE)

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        """Applies the filter criteria. Subclasses extend this for their own filters."""
        model = queryset.model
        institution_field = getattr(model, "grant_institution_field", None)
        if self.filter_by_institution and institution_field and filter_map.institution_id:
            queryset = queryset.filter(**{institution_field: filter_map.institution_id})
        if self.name_filter_field and filter_map.name:
            queryset = queryset.filter(**{self.name_filter_field: filter_map.name})
        return queryset

    def valid_for_save(self, serializer, instance: Optional[Model]) -> None:
        """Additional validation before create / modify, raise to reject."""

    def notify_saved(self, entity: Model) -> Model:
        return entity

    def perform_create(self, serializer) -> Model:
        return serializer.save()

    def perform_update(self, serializer) -> Model:
        return serializer.save()

    # -- helpers ------------------------------------------------------------

    def get_all(self, filter_map: FilterMap) -> QuerySet:
        queryset = self.apply_filter(self.get_queryset(), filter_map)
        return self.authorization.filter_granted(queryset, self.entity_type, PrivilegeType.READ_ONLY)

    def load_entity(self, model_id: str) -> Model:
        try:
            return self.get_queryset().get(**{self.lookup_field: model_id})
        except (ObjectDoesNotExist, ValueError, DjangoValidationError):
            raise ResourceNotFoundException(self.entity_type, model_id)

    def load_entities(self, model_ids: List[str]) -> List[Model]:
        try:
            return list(self.get_queryset().filter(**{f"{self.lookup_field}__in": model_ids}))
        except (ValueError, DjangoValidationError):
            raise IllegalAPIArgumentException(f"Invalid ids: {','.join(model_ids)}")

    def get_model_id(self) -> str:
        return self.kwargs[self.lookup_url_kwarg or self.lookup_field]

    def get_filter_map(self, institution_id: Optional[int]) -> FilterMap:
        return FilterMap(self.request.query_params, institution_id)

    def get_create_data(self, request: Request) -> Any:
        data = request.data.copy()
        if not data.get(INSTITUTION_ID):
            data[INSTITUTION_ID] = getattr(request.user, "institution_id", None)
        return data

    def get_update_data(self, request: Request) -> Any:
        data = request.data.copy()
        data.pop(INSTITUTION_ID, None)
        return data

    def create_report(self, bulk_action_type: BulkActionType, entity: Model) -> Response:
        report = self.bulk_action_service.create_report(
            BulkAction(bulk_action_type, self.entity_type, {entity.entity_key})
        )
        return Response(report.to_dict())

    # -- endpoints ----------------------------------------------------------

    def list(self, request: Request, *args, **kwargs) -> Response:
        institution_id = self.get_institution_id()
        self.check_read_privilege(institution_id)
        page = self.pagination_service.get_page_from_params(
            self.get_all(self.get_filter_map(institution_id)),
            request.query_params,
            self.sort_columns,
            self.default_sort,
        )
        return Response(page.to_dict(self.get_serializer(page.content, many=True).data))

    @action(detail=False, methods=["get"], url_path="names")
    def names(self, request: Request, *args, **kwargs) -> Response:
        institution_id = self.get_institution_id()
        self.check_read_privilege(institution_id)
        entities = self.get_all(self.get_filter_map(institution_id)).order_by("pk")
        return Response([entity.to_name().to_dict() for entity in entities])

    def retrieve(self, request: Request, *args, **kwargs) -> Response:
        entity = self.check_read_access(self.load_entity(self.get_model_id()))
        return Response(self.get_serializer(entity).data)

    @action(detail=False, methods=["get"], url_path="list", url_name="for-ids")
    def for_ids(self, request: Request, *args, **kwargs) -> Response:
        model_ids = get_list_from_string(request.query_params.get(PARAM_MODEL_ID_LIST))
        if not model_ids:
            raise IllegalAPIArgumentException(f"Missing request parameter: {PARAM_MODEL_ID_LIST}")
        entities = [
            entity
            for entity in self.load_entities(model_ids)
            if self.authorization.has_grant(entity, PrivilegeType.READ_ONLY)
        ]
        return Response(self.get_serializer(entities, many=True).data)

    def create(self, request: Request, *args, **kwargs) -> Response:
        data = self.get_create_data(request)
        self.check_create_privilege(parse_institution_id(data.get(INSTITUTION_ID)))
        serializer = self.get_serializer(data=data)
        serializer.is_valid(raise_exception=True)
        self.valid_for_save(serializer, None)
        with transaction.atomic():
            entity = self.perform_create(serializer)
            result = self.get_serializer(entity).data
            self.activity_log.log(ActivityType.CREATE, entity, result)
        self.notify_saved(entity)
        return Response(result, status=status.HTTP_201_CREATED)

    def update(self, request: Request, *args, **kwargs) -> Response:
        entity = self.check_modify_access(self.load_entity(self.get_model_id()))
        serializer = self.get_serializer(entity, data=self.get_update_data(request), partial=True)
        serializer.is_valid(raise_exception=True)
        self.valid_for_save(serializer, entity)
        with transaction.atomic():
            entity = self.perform_update(serializer)
            result = self.get_serializer(entity).data
            self.activity_log.log(ActivityType.MODIFY, entity, result)
        self.notify_saved(entity)
        return Response(result)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        entity = self.check_write_access(self.load_entity(self.get_model_id()))
        return self.create_report(BulkActionType.HARD_DELETE, entity)
