"""Timestamp formatting utilities."""

from datetime import datetime, timezone


def now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision (e.g. "2025-11-13T18:45:40.572+00:00")."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def parse_timestamp(iso_timestamp: str):
    """Parse an ISO 8601 timestamp, accepting a trailing "Z". Returns None if unparseable."""
    if not isinstance(iso_timestamp, str):
        return None
    text = iso_timestamp.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_timestamp(iso_timestamp: str) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string

    Returns:
        "YYYY-MM-DD HH:MM:SS", or the original string if parsing fails

    Examples:
        format_timestamp("2025-11-13T18:45:40.572+00:00")
        # "2025-11-13 18:45:40"
    """
    dt = parse_timestamp(iso_timestamp)
    if dt is None:
        return iso_timestamp
    return dt.strftime("%Y-%m-%d %H:%M:%S")
