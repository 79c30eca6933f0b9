# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import Iterable, List, Optional

from epic_free_games.core.promotions import Classification, PromotionClassifier
from epic_free_games.models.epic import CatalogElement
from epic_free_games.models.game import GameData
from epic_free_games.utils.dates import Clock, system_now
from epic_free_games.utils.game_utils import resolve_store_url, select_image_url
from epic_free_games.utils.timezones import resolve_timezone

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class GameRecordBuilder:
    """Turns the raw catalog elements of one upstream response into normalized game records."""

    def __init__(self, include_upcoming: bool, timezone_name: str, clock: Clock = system_now):
        self.classifier = PromotionClassifier(
            tz=resolve_timezone(timezone_name),
            include_upcoming=include_upcoming,
            clock=clock
        )

    def _normalize_game_data(self, game_element: CatalogElement, classification: Classification) -> GameData:
        """Assembles the output record in the API's field order; empty optional fields are left out."""
        fields = {
            'title': game_element.get('title') or "",
            'description': game_element.get('description'),
            'image_url': select_image_url(game_element.get('keyImages')),
            'url': resolve_store_url(game_element),
            'status': classification.status,
            'start_date': classification.start_date,
            'end_date': classification.end_date,
            'date_precision': classification.date_precision,
            'publisher': (game_element.get('seller') or {}).get('name'),
        }
        optional = ('description', 'image_url', 'publisher')
        return GameData(**{key: value for key, value in fields.items() if value or key not in optional})

    def build(self, elements: Iterable[CatalogElement]) -> List[GameData]:
        """Classifies every element in upstream order; excluded elements are skipped, duplicates kept."""
        games: List[GameData] = []
        for game_element in elements:
            classification = self.classifier.classify(game_element)
            if classification is None:
                logger.debug(f"[{self.__class__.__name__}] Skipping '{game_element.get('title', '')}' (not free).")
                continue
            games.append(self._normalize_game_data(game_element, classification))

        logger.info(f"[{self.__class__.__name__}] Normalized {len(games)} free game(s).")
        return games


def build_games(
    elements: Iterable[CatalogElement],
    include_upcoming: bool,
    timezone_name: str,
    clock: Optional[Clock] = None
) -> List[GameData]:
    """Convenience wrapper: one builder per invocation, no shared state between calls."""
    builder = GameRecordBuilder(include_upcoming, timezone_name, clock=clock or system_now)
    return builder.build(elements)
