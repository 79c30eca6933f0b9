# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

import aiohttp

from epic_free_games.config import (
    DISCORD_MAX_EMBEDS, DISCORD_MESSAGE_CONTENT, DISCORD_TIMEOUT, UNKNOWN_DATE
)
from epic_free_games.core.base_client import NotificationError
from epic_free_games.models.game import (
    PRECISION_ESTIMATED, PRECISION_EXACT, PRECISION_UNKNOWN,
    STATUS_COMING_SOON, STATUS_FREE, GameData
)

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

COLOR_DEFAULT = 0x0078F2  # Epic Games blue
COLOR_FREE = 0x2ECC71
COLOR_COMING_SOON = 0xF1C40F

PRECISION_FOOTERS = {
    PRECISION_EXACT: "Dates are exact",
    PRECISION_ESTIMATED: "Dates are estimated",
    PRECISION_UNKNOWN: "Dates are unknown",
}


# ===== CORE BUSINESS LOGIC =====
def create_game_embed(game: GameData) -> Dict[str, Any]:
    """Formats one game as a Discord embed. Empty members are left out of the payload."""
    status = game.get('status')
    if status == STATUS_FREE:
        color = COLOR_FREE
    elif status == STATUS_COMING_SOON:
        color = COLOR_COMING_SOON
    else:
        color = COLOR_DEFAULT

    fields = []
    if game.get('publisher'):
        fields.append({"name": "Publisher", "value": game['publisher'], "inline": True})

    status_text = "Coming Soon" if status == STATUS_COMING_SOON else "Currently Free"
    fields.append({"name": "Status", "value": status_text, "inline": True})

    if game.get('start_date') != UNKNOWN_DATE:
        fields.append({"name": "Available From", "value": game.get('start_date', '')})
    if game.get('end_date') != UNKNOWN_DATE:
        fields.append({"name": "Available Until", "value": game.get('end_date', '')})

    embed: Dict[str, Any] = {
        "title": game.get('title'),
        "description": game.get('description'),
        "url": game.get('url'),
        "color": color,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec='seconds'),
        "fields": fields,
    }
    embed = {key: value for key, value in embed.items() if value}

    if game.get('image_url'):
        embed["thumbnail"] = {"url": game['image_url']}

    embed["footer"] = {"text": PRECISION_FOOTERS.get(game.get('date_precision', ''), "")}
    return embed


def build_webhook_message(games: List[GameData]) -> Dict[str, Any]:
    """Builds the webhook body; Discord accepts at most ten embeds, the rest are dropped."""
    return {
        "content": DISCORD_MESSAGE_CONTENT,
        "embeds": [create_game_embed(game) for game in games[:DISCORD_MAX_EMBEDS]],
    }


class DiscordNotifier:
    """Posts game summaries to a Discord channel through an incoming webhook."""

    def __init__(self, webhook_url: str, session: aiohttp.ClientSession, timeout: float = DISCORD_TIMEOUT):
        self.webhook_url = webhook_url
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def send(self, games: List[GameData]) -> None:
        """Sends one message for `games`. Nothing is sent for an empty list. Raises NotificationError."""
        if not games:
            logger.info(f"[{self.__class__.__name__}] No games to notify about.")
            return

        message = build_webhook_message(games)
        try:
            async with self._session.post(self.webhook_url, json=message, timeout=self._timeout) as response:
                if response.status < 200 or response.status >= 300:
                    raise NotificationError(f"Discord webhook returned non-2xx status code: {response.status}")
        except asyncio.TimeoutError as e:
            raise NotificationError("error sending webhook request: timed out") from e
        except aiohttp.ClientError as e:
            raise NotificationError(f"error sending webhook request: {e}") from e

        logger.info(f"[{self.__class__.__name__}] Discord notification sent for {len(games)} games")
