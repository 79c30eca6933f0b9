# ===== IMPORTS & DEPENDENCIES =====
import logging
import re
from datetime import timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from epic_free_games.config import FALLBACK_UTC_OFFSET_HOURS

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

FALLBACK_TIMEZONE = timezone(timedelta(hours=FALLBACK_UTC_OFFSET_HOURS), f"UTC+{FALLBACK_UTC_OFFSET_HOURS}")
_OFFSET_PREFIXES = ("UTC", "GMT")
_HOURS_RE = re.compile(r"[+-]?\d+")

# ===== UTILITY FUNCTIONS =====

def _load_iana_zone(name: str) -> Optional[tzinfo]:
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolves a user-supplied timezone string to a concrete tzinfo. Never raises.

    Resolution order:
        1. IANA zone name (e.g. 'America/New_York'); the empty string is UTC.
        2. 'UTC'/'GMT' with an optional signed whole-hour offset (e.g. 'UTC+3', 'GMT-5').
        3. Fixed UTC+8 fallback for anything else.
    """
    zone = _load_iana_zone(name)
    if zone is not None:
        return zone

    if name.startswith(_OFFSET_PREFIXES):
        offset = name[3:]
        if not offset:
            return timezone.utc
        if _HOURS_RE.fullmatch(offset):
            try:
                return timezone(timedelta(hours=int(offset)), name)
            except ValueError:
                # Offsets of a day or more are not representable.
                pass

    logger.debug(f"[resolve_timezone] Unrecognized timezone '{name}', using {FALLBACK_TIMEZONE.tzname(None)}.")
    return FALLBACK_TIMEZONE
