"""
Pagination Service - SEB Server Admin Backend

Slices sorted querysets into 1-based pages for list endpoints and the
console tables.

Features:
- Page value object with JSON representation
- Page size defaulting and clamping from settings
- Sort parameter (``name`` ascending, ``-name`` descending) mapped to columns

Author: SEB Server Development Team
Version: 1.0.0
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from django.conf import settings

from .exceptions import IllegalAPIArgumentException

ATTR_PAGE_NUMBER = "page_number"
ATTR_PAGE_SIZE = "page_size"
ATTR_SORT = "sort"


@dataclass
class Page:
    number_of_pages: int
    page_number: int
    page_size: int
    sort: Optional[str]
    content: List[Any] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.content

    def to_dict(self, content: Optional[List[Any]] = None) -> Dict[str, Any]:
        return {
            "number_of_pages": self.number_of_pages,
            "page_number": self.page_number,
            "page_size": self.page_size,
            "sort": self.sort,
            "content": self.content if content is None else content,
        }


def _to_int(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise IllegalAPIArgumentException(f"Invalid value for '{name}': {value}")


class PaginationService:
    """Builds pages from querysets. Stateless, one instance per request is fine."""

    def __init__(self, default_page_size: Optional[int] = None, max_page_size: Optional[int] = None):
        self.default_page_size = default_page_size or getattr(
            settings, "PAGINATION_DEFAULT_PAGE_SIZE", 10
        )
        self.max_page_size = max_page_size or getattr(settings, "PAGINATION_MAX_PAGE_SIZE", 500)

    def get_page_from_params(
        self,
        queryset,
        params: Mapping[str, Any],
        sort_columns: Mapping[str, str],
        default_sort: Optional[str] = None,
    ) -> Page:
        return self.get_page(
            queryset,
            _to_int(params.get(ATTR_PAGE_NUMBER), ATTR_PAGE_NUMBER),
            _to_int(params.get(ATTR_PAGE_SIZE), ATTR_PAGE_SIZE),
            params.get(ATTR_SORT) or None,
            sort_columns,
            default_sort,
        )

    def get_page(
        self,
        queryset,
        page_number: Optional[int],
        page_size: Optional[int],
        sort: Optional[str],
        sort_columns: Mapping[str, str],
        default_sort: Optional[str] = None,
    ) -> Page:
        """
        Returns one page of the sorted queryset.

        Args:
            queryset: Filtered queryset
            page_number: 1-based page number, defaults to 1
            page_size: Page size, defaults to the configured default, clamped to the max
            sort: Sort column name, ``-`` prefix for descending order
            sort_columns: Allowed sort names mapped to ORM fields
            default_sort: Sort applied when none is requested

        Raises:
            IllegalAPIArgumentException: On page number / size below 1 or unknown sort
        """
        page_number = 1 if page_number is None else page_number
        page_size = self.default_page_size if page_size is None else page_size
        if page_number < 1:
            raise IllegalAPIArgumentException(f"Invalid page number: {page_number}")
        if page_size < 1:
            raise IllegalAPIArgumentException(f"Invalid page size: {page_size}")
        page_size = min(page_size, self.max_page_size)

        sort = sort or default_sort
        queryset = queryset.order_by(*self.get_ordering(sort, sort_columns))

        total = queryset.count()
        number_of_pages = max(1, math.ceil(total / page_size))
        offset = (page_number - 1) * page_size
        content = list(queryset[offset:offset + page_size]) if offset < total else []

        return Page(
            number_of_pages=number_of_pages,
            page_number=page_number,
            page_size=page_size,
            sort=sort,
            content=content,
        )

    @staticmethod
    def get_ordering(sort: Optional[str], sort_columns: Mapping[str, str]) -> List[str]:
        if not sort:
            return ["pk"]
        descending = sort.startswith("-")
        name = sort[1:] if descending else sort
        column = sort_columns.get(name)
        if column is None:
            raise IllegalAPIArgumentException(f"Unsupported sort column: {name}")
        return [f"-{column}" if descending else column, "pk"]
