"""
Shared helpers for list/string conversion and UTC time handling.

Author: SEB Server Development Team
Version: 1.0.0
"""

from datetime import datetime, timezone as dt_timezone
from typing import Collection, List, Optional, TypeVar

from django.utils import timezone

T = TypeVar("T")

LIST_SEPARATOR = ","
CARRIAGE_RETURN = "\n"
FORM_URL_ENCODED_SEPARATOR = "&"


def to_singleton(collection: Collection[T]) -> T:
    """Returns the single element of a collection, raises ValueError otherwise."""
    if len(collection) != 1:
        raise ValueError(
            f"Collection has no or more then one element. Expected is exactly one. Size: {len(collection)}"
        )
    return next(iter(collection))


def get_list_from_string(value: Optional[str], separator: str = LIST_SEPARATOR) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(separator) if part.strip()]


def streamline_carriage_return(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.replace("\r\n", CARRIAGE_RETURN).replace("\r", CARRIAGE_RETURN)


def convert_carriage_return_to_list_separator(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return streamline_carriage_return(value.strip()).replace(CARRIAGE_RETURN, LIST_SEPARATOR)


def convert_list_separator_to_carriage_return(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip().replace(LIST_SEPARATOR, CARRIAGE_RETURN)


def get_list_of_lines(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [line for line in streamline_carriage_return(value).split(CARRIAGE_RETURN) if line]


def format_line_breaks(text: Optional[str]) -> str:
    # Activity messages are one-line JSON, break them at the separators for display
    if not text:
        return ""
    return text.replace(LIST_SEPARATOR, LIST_SEPARATOR + CARRIAGE_RETURN)


def to_datetime_utc(millis: Optional[int]) -> Optional[datetime]:
    if millis is None:
        return None
    return datetime.fromtimestamp(millis / 1000, tz=dt_timezone.utc)


def to_timestamp_utc(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    if timezone.is_naive(value):
        value = timezone.make_aware(value, dt_timezone.utc)
    return int(value.timestamp() * 1000)


def get_milliseconds_now() -> int:
    return to_timestamp_utc(timezone.now())
