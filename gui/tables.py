"""
Console Table Support - SEB Server Admin Backend

Server side rendering helpers for the paged entity tables of the management
console.

Features:
- ColumnDefinition: column label, cell value and optional sort column
- TableFilterAttribute: filter inputs (text, single selection, date range)
- EntityTable: filter values from the request, one page from the
  pagination service, sort links and the empty message

Author: SEB Server Development Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from django.conf import settings
from django.http import QueryDict

from core.filters import FROM, TO, FilterMap
from core.pagination import ATTR_PAGE_NUMBER, ATTR_SORT, Page, PaginationService


class CriteriaType(Enum):
    TEXT = "TEXT"
    SINGLE_SELECTION = "SINGLE_SELECTION"
    DATE_RANGE = "DATE_RANGE"


@dataclass
class TableFilterAttribute:
    criteria_type: CriteriaType
    name: str
    label: str = ""
    # (value, label) pairs of a selection
    resources: Sequence[Tuple[str, str]] = ()
    default: Optional[Any] = None

    @property
    def param_names(self) -> List[str]:
        if self.criteria_type is CriteriaType.DATE_RANGE:
            return [FROM, TO]
        return [self.name]


@dataclass
class ColumnDefinition:
    name: str
    label: str
    value: Callable[[Any], Any]
    filter: Optional[TableFilterAttribute] = None
    sortable: bool = False

    def get_value(self, row: Any) -> Any:
        return self.value(row)


@dataclass
class SortLink:
    label: str
    query: Optional[str]
    active: bool = False
    descending: bool = False


class EntityTable:
    """
    One page of a console table.

    The filter callable receives the queryset and a FilterMap built from the
    request parameters merged with the filter defaults. Sort columns are the
    names of the sortable columns.
    """

    def __init__(
        self,
        request,
        queryset,
        columns: List[ColumnDefinition],
        filter_function: Optional[Callable[[Any, FilterMap], Any]] = None,
        filters: Sequence[TableFilterAttribute] = (),
        sort_columns: Optional[Dict[str, str]] = None,
        default_sort: Optional[str] = None,
        page_size: Optional[int] = None,
        empty_message: str = "No entries found",
        row_link: Optional[Callable[[Any], str]] = None,
    ):
        self.request = request
        self.queryset = queryset
        self.columns = columns
        self.filter_function = filter_function
        self.filters = list(filters)
        for column in columns:
            if column.filter is not None and column.filter not in self.filters:
                self.filters.append(column.filter)
        self.sort_columns = sort_columns or {c.name: c.name for c in columns if c.sortable}
        self.default_sort = default_sort
        self.page_size = page_size or getattr(settings, "GUI_LIST_PAGE_SIZE", 20)
        self.empty_message = empty_message
        self.row_link = row_link
        self.page: Optional[Page] = None

    @property
    def params(self) -> QueryDict:
        return self.request.GET

    def get_filter_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for attribute in self.filters:
            if attribute.criteria_type is CriteriaType.DATE_RANGE:
                default_from, default_to = attribute.default or (None, None)
                values[FROM] = self.params.get(FROM) or _format_date(default_from)
                values[TO] = self.params.get(TO) or _format_date(default_to)
            else:
                value = self.params.get(attribute.name)
                if value is None and attribute.default is not None:
                    value = str(attribute.default)
                values[attribute.name] = value or ""
        return values

    @property
    def filter_inputs(self) -> List[Dict[str, Any]]:
        values = self.get_filter_values()
        return [
            {
                "attribute": attribute,
                "type": attribute.criteria_type.value,
                "value": values.get(attribute.name, ""),
                "from": values.get(FROM, ""),
                "to": values.get(TO, ""),
            }
            for attribute in self.filters
        ]

    @property
    def page_number(self) -> int:
        value = self.params.get(ATTR_PAGE_NUMBER, "")
        return int(value) if value.isdigit() and int(value) > 0 else 1

    @property
    def sort(self) -> Optional[str]:
        sort = self.params.get(ATTR_SORT)
        if sort and sort.lstrip("-") in self.sort_columns:
            return sort
        return self.default_sort

    def build(self) -> "EntityTable":
        queryset = self.queryset
        if self.filter_function is not None:
            values = self.get_filter_values()
            if len(values.get(TO) or "") == 10:
                # a plain date includes the whole day
                values[TO] = f"{values[TO]}T23:59:59"
            filter_map = FilterMap(values)
            queryset = self.filter_function(queryset, filter_map)
        self.page = PaginationService().get_page(
            queryset, self.page_number, self.page_size, self.sort, self.sort_columns
        )
        return self

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return [
            {
                "cells": [column.get_value(entity) for column in self.columns],
                "link": self.row_link(entity) if self.row_link else None,
            }
            for entity in self.page.content
        ]

    def _query(self, **overrides) -> str:
        params = self.params.copy()
        for key, value in overrides.items():
            if value is None:
                params.pop(key, None)
            else:
                params[key] = value
        return params.urlencode()

    @property
    def headers(self) -> List[SortLink]:
        current = self.sort or ""
        links = []
        for column in self.columns:
            if column.name not in self.sort_columns:
                links.append(SortLink(column.label, None))
                continue
            active = current.lstrip("-") == column.name
            descending = active and current.startswith("-")
            next_sort = column.name if descending or not active else f"-{column.name}"
            links.append(
                SortLink(
                    column.label,
                    self._query(**{ATTR_SORT: next_sort, ATTR_PAGE_NUMBER: None}),
                    active,
                    descending,
                )
            )
        return links

    @property
    def previous_query(self) -> Optional[str]:
        if self.page.page_number <= 1:
            return None
        return self._query(**{ATTR_PAGE_NUMBER: str(self.page.page_number - 1)})

    @property
    def next_query(self) -> Optional[str]:
        if self.page.page_number >= self.page.number_of_pages:
            return None
        return self._query(**{ATTR_PAGE_NUMBER: str(self.page.page_number + 1)})


def _format_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.astimezone(dt_timezone.utc).date().isoformat()
