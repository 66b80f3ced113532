from .months import MONTH_NAMES, month_range, parse_month
from .timestamp import format_timestamp, parse_timestamp

__all__ = ["MONTH_NAMES", "month_range", "parse_month", "format_timestamp", "parse_timestamp"]
