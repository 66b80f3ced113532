"""Month name resolution and month date ranges."""
from datetime import datetime, timezone
from typing import Dict, Tuple

from sales_api.errors import InvalidMonthError

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_MONTH_LOOKUP: Dict[str, int] = {}
for _number, _name in enumerate(MONTH_NAMES, start=1):
    _MONTH_LOOKUP[_name] = _number
    _MONTH_LOOKUP[_name[:3]] = _number


def parse_month(month: str) -> int:
    """
    Resolve an English month name to its number (1-12).

    Full names and three-letter abbreviations are accepted in any case.

    Raises:
        InvalidMonthError: If the name is not a month
    """
    key = (month or "").strip().lower()
    number = _MONTH_LOOKUP.get(key)
    if number is None:
        raise InvalidMonthError(month)
    return number


def month_range(month: str, year: int) -> Tuple[datetime, datetime]:
    """
    Get the [start, end) UTC bounds of a month.

    The end bound is the first instant of the following month and is exclusive.
    """
    number = parse_month(month)
    start = datetime(year, number, 1, tzinfo=timezone.utc)
    if number == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, number + 1, 1, tzinfo=timezone.utc)
    return start, end
