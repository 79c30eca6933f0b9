# ===== IMPORTS & DEPENDENCIES =====
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional

# ===== CONFIGURATION & CONSTANTS =====
DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

Clock = Callable[[], datetime]

# ===== UTILITY FUNCTIONS =====

def system_now() -> datetime:
    """Returns the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parses an RFC 3339 timestamp such as '2025-04-03T15:00:00.000Z'. Naive values are rejected."""
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def format_datetime(moment: datetime, tz: tzinfo) -> str:
    return moment.astimezone(tz).strftime(DISPLAY_FORMAT)


def format_date(value: str, tz: tzinfo) -> str:
    """
    Renders an upstream timestamp in `tz` as 'YYYY-MM-DD HH:MM:SS ZONE'.
    Unparseable input is returned unchanged, including the empty string.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return format_datetime(parsed, tz)
