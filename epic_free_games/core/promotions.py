# ===== IMPORTS & DEPENDENCIES =====
import logging
from dataclasses import dataclass
from datetime import timedelta, tzinfo
from typing import Iterator, List, Optional

from epic_free_games.config import ESTIMATED_PROMOTION_DAYS, UNKNOWN_DATE
from epic_free_games.models.epic import CatalogElement, PromotionalOffer, PromotionalOfferGroup
from epic_free_games.models.game import (
    PRECISION_ESTIMATED, PRECISION_EXACT, PRECISION_UNKNOWN,
    STATUS_COMING_SOON, STATUS_FREE
)
from epic_free_games.utils.dates import Clock, format_date, format_datetime, system_now
from epic_free_games.utils.game_utils import get_discount_price, is_free_price

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

FREE_DISCOUNT_PERCENTAGE = 100

# ===== TYPES & INTERFACES =====
@dataclass
class Classification:
    """Outcome of classifying one catalog element. Empty strings mean 'not resolved yet'."""
    status: str = ""
    start_date: str = ""
    end_date: str = ""
    date_precision: str = ""


# ===== CORE BUSINESS LOGIC =====
class PromotionClassifier:
    """
    Decides whether a catalog element is currently free, free soon, or paid,
    and which date window and precision label its record carries.

    One instance serves a single invocation: it holds the resolved timezone,
    the caller's upcoming-games choice and the clock used for estimated dates.
    """

    def __init__(self, tz: tzinfo, include_upcoming: bool, clock: Clock = system_now):
        self.tz = tz
        self.include_upcoming = include_upcoming
        self.clock = clock

    @staticmethod
    def _iter_offers(groups: Optional[List[PromotionalOfferGroup]]) -> Iterator[PromotionalOffer]:
        for group in groups or []:
            if not isinstance(group, dict):
                continue
            for offer in group.get('promotionalOffers') or []:
                if isinstance(offer, dict):
                    yield offer

    @staticmethod
    def _is_free_offer(offer: PromotionalOffer) -> bool:
        discount = offer.get('discountSetting') or {}
        return discount.get('discountPercentage') == FREE_DISCOUNT_PERCENTAGE

    def _set_offer_dates(self, result: Classification, offer: PromotionalOffer) -> None:
        result.start_date = format_date(offer.get('startDate') or "", self.tz)
        result.end_date = format_date(offer.get('endDate') or "", self.tz)
        result.date_precision = PRECISION_EXACT

    def _scan_free_offers(self, groups: Optional[List[PromotionalOfferGroup]], status: str, result: Classification) -> bool:
        """Applies every 100%-off offer in turn, so the last one seen decides the dates."""
        matched = False
        for offer in self._iter_offers(groups):
            if self._is_free_offer(offer):
                matched = True
                result.status = status
                self._set_offer_dates(result, offer)
        return matched

    def _apply_estimated_window(self, result: Classification) -> None:
        now = self.clock().astimezone(self.tz)
        result.status = STATUS_FREE
        result.start_date = format_datetime(now, self.tz)
        result.end_date = format_datetime(now + timedelta(days=ESTIMATED_PROMOTION_DAYS), self.tz)
        result.date_precision = PRECISION_ESTIMATED

    def _apply_fallback_dates(self, groups: Optional[List[PromotionalOfferGroup]], result: Classification) -> None:
        """
        Uses the first current offer group whose leading offer carries both dates,
        whatever its discount. First match wins here, unlike the 100%-off scans.
        """
        for group in groups or []:
            offers = group.get('promotionalOffers') if isinstance(group, dict) else None
            if not offers or not isinstance(offers[0], dict):
                continue
            offer = offers[0]
            if offer.get('startDate') and offer.get('endDate'):
                self._set_offer_dates(result, offer)
                break

    def classify(self, game_element: CatalogElement) -> Optional[Classification]:
        """Returns the classification, or None when the element must not be emitted."""
        promotions = game_element.get('promotions') or {}
        current_offers = promotions.get('promotionalOffers')
        upcoming_offers = promotions.get('upcomingPromotionalOffers')
        result = Classification()

        is_currently_free = self._scan_free_offers(current_offers, STATUS_FREE, result)

        has_upcoming_free = False
        if not is_currently_free and self.include_upcoming:
            has_upcoming_free = self._scan_free_offers(upcoming_offers, STATUS_COMING_SOON, result)

        if not is_currently_free and not has_upcoming_free:
            if not is_free_price(get_discount_price(game_element)):
                return None
            self._apply_estimated_window(result)

        if not self.include_upcoming and result.status == STATUS_COMING_SOON:
            return None

        dates_missing = not result.start_date and not result.end_date
        if result.status == STATUS_FREE and (dates_missing or result.date_precision == PRECISION_ESTIMATED):
            self._apply_fallback_dates(current_offers, result)
            if result.date_precision == PRECISION_ESTIMATED:
                logger.info(f"Game with estimated dates: {game_element.get('title', '')} (Status: {result.status})")

        if not result.start_date and not result.end_date:
            result.start_date = UNKNOWN_DATE
            result.end_date = UNKNOWN_DATE
            result.date_precision = PRECISION_UNKNOWN

        return result
