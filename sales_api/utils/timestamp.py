"""Timestamp parsing utilities."""
from datetime import datetime, timezone


def parse_timestamp(s: str) -> datetime:
    """
    Parse a timestamp string into an aware UTC datetime.

    Supports multiple formats:
    - ISO format with "Z" suffix: "2021-11-27T20:29:54+05:30" or "2022-03-01T00:00:00Z"
    - ISO format without timezone: "2022-03-01T10:00:00" (assumed UTC)
    - Space-separated: "2022-03-01 10:00:00"
    - Date only: "2022-03-01"

    Args:
        s: Timestamp string

    Returns:
        datetime object in UTC

    Raises:
        ValueError: If timestamp cannot be parsed
    """
    if not s:
        raise ValueError("Empty timestamp string")

    s = s.strip()

    # Convert trailing "Z" to "+00:00" for ISO format compatibility
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    candidates = [s]
    if " " in s and "T" not in s:
        candidates.append(s.replace(" ", "T"))

    for candidate in candidates:
        try:
            dt = datetime.fromisoformat(candidate)
        except ValueError:
            continue
        # If naive datetime, assume UTC
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    raise ValueError(f"Unable to parse timestamp: {s}. Expected ISO format (e.g., '2022-03-01T10:00:00Z')")


def format_timestamp(dt: datetime) -> str:
    """Render a datetime as fixed-width UTC ISO text, so stored values sort chronologically."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds")
