"""
Filter Map - SEB Server Admin Backend

Typed read access to the filter criteria of list requests. Every list
endpoint builds a FilterMap from its query parameters and hands it to the
controller's queryset filtering.

Author: SEB Server Development Team
Version: 1.0.0
"""

from datetime import datetime, time, timezone as dt_timezone
from typing import List, Mapping, Optional, Tuple

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .exceptions import IllegalAPIArgumentException
from .utils import get_list_from_string

INSTITUTION_ID = "institution_id"
ACTIVE = "active"
NAME = "name"
FROM = "from"
TO = "to"
FROM_TO = "from_to"

# Paging parameters are not filter criteria
PAGING_PARAMS = ("page_number", "page_size", "sort")


class FilterMap:
    def __init__(self, params: Mapping[str, str], institution_id: Optional[int] = None):
        self.params = {
            key: params.get(key) for key in params.keys() if key not in PAGING_PARAMS
        }
        if institution_id is not None:
            self.params[INSTITUTION_ID] = str(institution_id)

    def __contains__(self, name: str) -> bool:
        return bool(self.params.get(name))

    def __repr__(self) -> str:
        return f"FilterMap({self.params!r})"

    @property
    def institution_id(self) -> Optional[int]:
        return self.get_int(INSTITUTION_ID)

    @property
    def active(self) -> Optional[bool]:
        return self.get_bool(ACTIVE)

    @property
    def name(self) -> Optional[str]:
        return self.get_string(NAME)

    def get_string(self, name: str) -> Optional[str]:
        value = self.params.get(name)
        if value is None or str(value).strip() == "":
            return None
        return str(value).strip()

    def get_int(self, name: str) -> Optional[int]:
        value = self.get_string(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise IllegalAPIArgumentException(f"Invalid number for filter '{name}': {value}")

    def get_bool(self, name: str) -> Optional[bool]:
        value = self.get_string(name)
        if value is None:
            return None
        lowered = value.lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise IllegalAPIArgumentException(f"Invalid boolean for filter '{name}': {value}")

    def get_list(self, name: str) -> List[str]:
        return get_list_from_string(self.get_string(name))

    def get_datetime(self, name: str) -> Optional[datetime]:
        return parse_utc(self.get_string(name), name)

    def get_from_to(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Date range from the ``from``/``to`` parameters or a ``from_to`` pair."""
        from_to = self.get_list(FROM_TO)
        if from_to:
            if len(from_to) != 2:
                raise IllegalAPIArgumentException(
                    f"Invalid date range for filter '{FROM_TO}': expected 'from,to'"
                )
            return parse_utc(from_to[0], FROM), parse_utc(from_to[1], TO)
        return self.get_datetime(FROM), self.get_datetime(TO)


def parse_utc(value: Optional[str], name: str = "") -> Optional[datetime]:
    if not value:
        return None
    parsed = parse_datetime(value)
    if parsed is None:
        date_value = parse_date(value)
        if date_value is None:
            raise IllegalAPIArgumentException(f"Invalid date/time for filter '{name}': {value}")
        parsed = datetime.combine(date_value, time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed
