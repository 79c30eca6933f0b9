# ===== CONFIGURATION & CONSTANTS =====
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TRUE_STRINGS = ("1", "t", "T", "TRUE", "true", "True")
FALSE_STRINGS = ("0", "f", "F", "FALSE", "false", "False")

# A missing .env file is fine; the process environment still applies.
load_dotenv()


def get_env_str(key: str, default: str) -> str:
    """Returns the environment value for `key`, or `default` when unset or empty."""
    value = os.getenv(key)
    if not value:
        return default
    return value


def get_env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"⚠️ Environment variable {key} is not a valid integer, using default: {default}")
        return default


def parse_bool(value: str) -> bool:
    """
    Parses the boolean spellings accepted for query parameters and env values:
    1, t, T, TRUE, true, True and 0, f, F, FALSE, false, False.
    Raises ValueError for anything else so callers can keep their default.
    """
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


def get_env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return parse_bool(value)
    except ValueError:
        logger.warning(f"⚠️ Environment variable {key} is not a valid boolean, using default: {default}")
        return default


# --- General Settings ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- HTTP Server ---
PORT = get_env_int("PORT", 8080)

# --- Store Defaults ---
COUNTRY_CODE = get_env_str("COUNTRY_CODE", "PH")
LOCALE = get_env_str("LOCALE", "en-PH")
TIMEZONE = get_env_str("TIMEZONE", "Asia/Manila")

# --- Scheduler ---
ENABLE_CRON = get_env_bool("ENABLE_CRON", False)
CRON_SCHEDULE = get_env_str("CRON_SCHEDULE", "0 0 0 * * *")

# --- Discord Webhook ---
DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL", "")
DISCORD_TIMEOUT = 10  # seconds
DISCORD_MAX_EMBEDS = 10
DISCORD_MESSAGE_CONTENT = "🎮 Free Games from Epic Games Store 🎮"

# --- Web Scraping & API Headers ---
COMMON_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36',
    'Content-Type': 'application/json',
    'Accept': 'application/json, text/plain, */*',
}

# --- Epic Games Source ---
EPIC_GAMES_API_URL = "https://graphql.epicgames.com/graphql"
EPIC_STORE_PAGE_URL = "https://store.epicgames.com/en-US/p/{slug}"
EPIC_CATEGORY = "games/edition/base|bundles/games|editors"
EPIC_RESULT_COUNT = 100
EPIC_REQUEST_TIMEOUT = get_env_int("EPIC_REQUEST_TIMEOUT", 30)  # seconds
EPIC_USE_BROWSER = get_env_bool("EPIC_USE_BROWSER", False)

# --- Classification ---
IMAGE_TYPES = ("Thumbnail", "DieselGameBox")
FREE_PRICE_LITERALS = ("$0.00", "0", "")
ESTIMATED_PROMOTION_DAYS = 7
FALLBACK_UTC_OFFSET_HOURS = 8
UNKNOWN_DATE = "Unknown"
