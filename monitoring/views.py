"""
Monitoring Views - SEB Server Admin Backend

Endpoints:
- /client_connection/   Read-only client connections (filters status, exam_id)
- /client_event/        Read-only client events (filters connection_id, types, from/to)

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db.models import QuerySet

from core.controllers import ReadonlyEntityController
from core.entities import EntityType
from core.exceptions import IllegalAPIArgumentException
from core.filters import FilterMap
from core.utils import to_timestamp_utc

from .models import ClientConnection, ClientEvent, EventType
from .serializers import ClientConnectionSerializer, ClientEventSerializer


class ClientConnectionController(ReadonlyEntityController):
    entity_type = EntityType.CLIENT_CONNECTION
    queryset = ClientConnection.objects.all()
    serializer_class = ClientConnectionSerializer
    name_filter_field = "user_session_id__icontains"
    sort_columns = {
        "status": "status",
        "exam_id": "exam_id",
        "user_session_id": "user_session_id",
        "created_at": "created_at",
    }
    default_sort = "-created_at"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        status = filter_map.get_string("status")
        if status:
            queryset = queryset.filter(status=status)
        exam_id = filter_map.get_int("exam_id")
        if exam_id is not None:
            queryset = queryset.filter(exam_id=exam_id)
        return queryset


def parse_event_types(names):
    """Event type names or numbers to their integer values."""
    types = []
    for name in names:
        if name.isdigit() and int(name) in EventType.values:
            types.append(int(name))
        elif name.upper() in EventType.names:
            types.append(EventType[name.upper()].value)
        else:
            raise IllegalAPIArgumentException(f"Unknown event type: {name}")
    return types


class ClientEventController(ReadonlyEntityController):
    entity_type = EntityType.CLIENT_EVENT
    queryset = ClientEvent.objects.select_related("connection")
    serializer_class = ClientEventSerializer
    name_filter_field = "text__icontains"
    sort_columns = {"timestamp": "timestamp", "type": "type"}
    default_sort = "timestamp"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        connection_id = filter_map.get_int("connection_id")
        if connection_id is not None:
            queryset = queryset.filter(connection_id=connection_id)
        types = filter_map.get_list("types")
        if types:
            queryset = queryset.filter(type__in=parse_event_types(types))
        from_time, to_time = filter_map.get_from_to()
        if from_time:
            queryset = queryset.filter(timestamp__gte=to_timestamp_utc(from_time))
        if to_time:
            queryset = queryset.filter(timestamp__lte=to_timestamp_utc(to_time))
        return queryset
