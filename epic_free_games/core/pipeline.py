# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import List, Optional

from epic_free_games.core.base_client import EpicFreeGamesError, NotificationError
from epic_free_games.core.discord_notifier import DiscordNotifier
from epic_free_games.models.game import GameData
from epic_free_games.sources.epic_games import EpicGamesSource

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


# ===== CORE BUSINESS LOGIC =====
class GamePipeline:
    """
    Fetches, normalizes and optionally announces free Epic games.
    Every call is independent: nothing is cached or remembered between invocations,
    so HTTP requests and scheduled runs can overlap freely.
    """

    def __init__(
        self,
        source: EpicGamesSource,
        notifier: Optional[DiscordNotifier],
        country: str,
        locale: str,
        timezone_name: str
    ):
        self.source = source
        self.notifier = notifier
        self.country = country
        self.locale = locale
        self.timezone_name = timezone_name

    @property
    def can_notify(self) -> bool:
        return self.notifier is not None

    async def fetch_games(
        self,
        include_upcoming: bool = True,
        country: Optional[str] = None,
        locale: Optional[str] = None,
        timezone_name: Optional[str] = None
    ) -> List[GameData]:
        """Runs one upstream query and returns the normalized records. Raises FetchError."""
        return await self.source.fetch_free_games(
            country=country or self.country,
            locale=locale or self.locale,
            include_upcoming=include_upcoming,
            timezone_name=timezone_name if timezone_name is not None else self.timezone_name
        )

    async def notify(self, games: List[GameData]) -> None:
        """Sends the games to Discord. Raises NotificationError, including when no webhook is set."""
        if self.notifier is None:
            raise NotificationError("Discord webhook URL not configured")
        await self.notifier.send(games)

    async def notify_quietly(self, games: List[GameData]) -> bool:
        """Like notify(), but failures are only logged. Returns True when the message went out."""
        try:
            await self.notify(games)
        except NotificationError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Error sending Discord notification: {e}")
            return False
        return True

    async def run_scheduled(self) -> None:
        """One scheduled tick: fetch with upcoming games included, then notify if a webhook is set."""
        logger.info(f"[{self.__class__.__name__}] Running scheduled free games check...")
        try:
            games = await self.fetch_games(include_upcoming=True)
        except EpicFreeGamesError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Error fetching free games: {e}")
            return

        logger.info(f"[{self.__class__.__name__}] Found {len(games)} free game(s)")
        if self.can_notify:
            await self.notify_quietly(games)
