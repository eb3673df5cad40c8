"""
Institution Views - SEB Server Admin Backend

Endpoints:
- /institution/ with the activatable entity controller endpoints

Filters:
- name (contains), url_suffix, active

Author: SEB Server Development Team
Version: 1.0.0
"""

from django.db.models import QuerySet

from core.controllers import ActivatableEntityController
from core.entities import EntityType
from core.filters import FilterMap

from .models import Institution
from .serializers import InstitutionSerializer


class InstitutionController(ActivatableEntityController):
    entity_type = EntityType.INSTITUTION
    queryset = Institution.objects.all()
    serializer_class = InstitutionSerializer
    # Visibility of institutions is decided by the grant filter alone
    filter_by_institution = False
    sort_columns = {"name": "name", "url_suffix": "url_suffix", "active": "active"}
    default_sort = "name"

    def apply_filter(self, queryset: QuerySet, filter_map: FilterMap) -> QuerySet:
        queryset = super().apply_filter(queryset, filter_map)
        url_suffix = filter_map.get_string("url_suffix")
        if url_suffix:
            queryset = queryset.filter(url_suffix=url_suffix)
        return queryset
