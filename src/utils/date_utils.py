"""Date and time utility functions."""
from datetime import datetime, timezone
from typing import Optional, Union


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO 8601 timestamp.

    Args:
        value: ISO string (e.g., "2025-10-28T14:32:10+08:00") or datetime

    Returns:
        Timezone-aware datetime (naive values are taken as UTC)

    Raises:
        ValueError: If the string is not ISO 8601
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid timestamp format: {value}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_registration_date(value: Union[str, datetime], tz: Optional[timezone] = None) -> str:
    """
    Format a registration timestamp for the admin table.

    Args:
        value: Timestamp to format
        tz: Display timezone (default: local timezone)

    Returns:
        e.g. "Oct 28, 2025, 02:32 PM"
    """
    parsed = parse_timestamp(value).astimezone(tz)
    return parsed.strftime("%b %d, %Y, %I:%M %p")
