"""
User Activity Log Service - SEB Server Admin Backend

Records the actions of the current user on administrable entities.

Author: SEB Server Development Team
Version: 1.0.0
"""

import json
import logging
import uuid
from typing import Any, Dict, Optional

from django.core.serializers.json import DjangoJSONEncoder
from django.forms.models import model_to_dict

from core.entities import EntityKey, EntityType, GrantEntityMixin
from core.exceptions import IllegalAPIArgumentException

from .models import ActivityType, UserActivityLog

logger = logging.getLogger(__name__)

_entity_serializers: Dict[EntityType, type] = {}


def register_entity_serializer(entity_type: EntityType, serializer_class) -> None:
    _entity_serializers[entity_type] = serializer_class


def serialize_entity(entity: GrantEntityMixin) -> Dict[str, Any]:
    """Serialized form of an entity, the default message of its log entries."""
    serializer_class = _entity_serializers.get(entity.entity_type)
    if serializer_class is None:
        return model_to_dict(entity)
    return serializer_class(entity).data


def to_message(data: Any) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return json.dumps(data, cls=DjangoJSONEncoder)


class UserActivityLogService:
    def __init__(self, user):
        self.user = user

    def log(
        self,
        activity_type: ActivityType,
        entity: GrantEntityMixin,
        message: Any = None,
    ) -> Optional[UserActivityLog]:
        """
        Stores an activity log entry for an entity.

        Args:
            activity_type: Kind of activity
            entity: Entity the activity was applied to
            message: Text or JSON serializable data, the serialized entity when omitted
        """
        if message is None:
            message = serialize_entity(entity)
        return self.log_key(activity_type, entity.entity_key, message)

    def log_key(
        self, activity_type: str, entity_key: EntityKey, message: Any = None
    ) -> Optional[UserActivityLog]:
        if not getattr(self.user, "is_authenticated", False):
            logger.warning(
                "No user to log %s on %s:%s", activity_type, entity_key.entity_type, entity_key.model_id
            )
            return None
        return UserActivityLog.objects.create(
            user=self.user,
            activity_type=str(activity_type),
            entity_type_name=str(entity_key.entity_type),
            entity_id=entity_key.model_id,
            message=to_message(message),
        )


def filter_activity_logs(queryset, filter_map):
    """Applies the activity log filter criteria (user, date range, types)."""
    user_uuid = filter_map.get_string("user")
    if user_uuid:
        try:
            queryset = queryset.filter(user__uuid=uuid.UUID(user_uuid))
        except ValueError:
            raise IllegalAPIArgumentException(f"Invalid user id: {user_uuid}")
    from_time, to_time = filter_map.get_from_to()
    if from_time:
        queryset = queryset.filter(timestamp__gte=from_time)
    if to_time:
        queryset = queryset.filter(timestamp__lte=to_time)
    activity_types = filter_map.get_list("activity_types")
    if activity_types:
        queryset = queryset.filter(activity_type__in=activity_types)
    entity_types = filter_map.get_list("entity_types")
    if entity_types:
        queryset = queryset.filter(entity_type_name__in=entity_types)
    return queryset
