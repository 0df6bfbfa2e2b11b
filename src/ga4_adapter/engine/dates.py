from __future__ import annotations
from typing import Any, Optional
import re

from ga4_adapter.contracts.query import DateRange, QueryArguments
from ga4_adapter.errors import UnsupportedDateFormatError

# Relative bounds resolved by GA4, not locally
DEFAULT_START_DATE = "7daysAgo"
DEFAULT_END_DATE = "today"

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_ISO_DATETIME = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}")
_US_DATE = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")


def normalize_date(value: Any) -> str:
    """
    Normalize a literal date to GA4's YYYY-MM-DD form.

    Accepted inputs:
    - YYYY-MM-DD (returned unchanged)
    - YYYY-MM-DDTHH:MM:SS (truncated to the date portion)
    - M/D/YYYY or MM/DD/YYYY (reordered and zero-padded)

    Anything else raises UnsupportedDateFormatError.
    """
    if not isinstance(value, str):
        raise UnsupportedDateFormatError(value)

    if _ISO_DATE.fullmatch(value):
        return value

    if _ISO_DATETIME.fullmatch(value):
        return value[:10]

    match = _US_DATE.fullmatch(value)
    if match:
        month, day, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    raise UnsupportedDateFormatError(value)


def _first_present(value: dict[str, Any], *keys: str) -> Optional[Any]:
    for key in keys:
        if value.get(key):
            return value[key]
    return None


def resolve_date_range(arguments: QueryArguments) -> DateRange:
    """
    Resolve the report date range from query arguments.

    A literal dateRange argument supplies start/end under snake_case or
    camelCase keys; both bounds are required. Without one, the range is the
    rolling window 7daysAgo..today.
    """
    date_range = arguments.date_range
    if date_range is None or date_range.type != "literal":
        return DateRange(start_date=DEFAULT_START_DATE, end_date=DEFAULT_END_DATE)

    raw_start = _first_present(date_range.value, "start_date", "startDate")
    raw_end = _first_present(date_range.value, "end_date", "endDate")

    return DateRange(
        start_date=normalize_date(raw_start),
        end_date=normalize_date(raw_end),
    )
