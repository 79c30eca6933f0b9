# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from epic_free_games.config import (
    COMMON_HEADERS, EPIC_CATEGORY, EPIC_GAMES_API_URL,
    EPIC_REQUEST_TIMEOUT, EPIC_RESULT_COUNT
)
from epic_free_games.core.base_client import MAX_ERROR_BODY_LENGTH, BaseWebClient, FetchError
from epic_free_games.core.records import build_games
from epic_free_games.models.epic import CatalogElement
from epic_free_games.models.game import GameData
from epic_free_games.utils.dates import Clock

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

FREE_GAMES_QUERY = """
query searchStoreQuery(
  $category: String,
  $count: Int,
  $country: String!,
  $locale: String,
  $freeGame: Boolean,
  $onSale: Boolean,
  $withPrice: Boolean = true
) {
  Catalog {
    searchStore(
      category: $category
      count: $count
      country: $country
      freeGame: $freeGame
      onSale: $onSale
      locale: $locale
    ) {
      elements {
        title
        description
        seller { name }
        keyImages { type url }
        productSlug
        urlSlug
        url
        offerMappings { pageSlug pageType }
        catalogNs {
          mappings(pageType: "productHome") { pageSlug pageType }
        }
        linkedOffer {
          effectiveDate
          customAttributes { key value }
        }
        categories { path }
        namespace
        id
        price(country: $country) @include(if: $withPrice) {
          totalPrice {
            fmtPrice(locale: $locale) { discountPrice originalPrice }
          }
        }
        promotions {
          promotionalOffers {
            promotionalOffers {
              startDate
              endDate
              discountSetting { discountType discountPercentage }
            }
          }
          upcomingPromotionalOffers {
            promotionalOffers {
              startDate
              endDate
              discountSetting { discountType discountPercentage }
            }
          }
        }
      }
    }
  }
}
"""

# Runs inside the browser page; returns the raw status and body so Python decides what failed.
_BROWSER_FETCH_JS = """
([url, body]) => fetch(url, {
    method: 'POST',
    headers: { 'Content-Type': 'application/json' },
    body: JSON.stringify(body)
}).then(response => response.text().then(text => ({ status: response.status, body: text })))
""".strip()


# ===== CORE BUSINESS LOGIC =====
class EpicGamesSource(BaseWebClient):
    """
    Queries the Epic Games Store GraphQL catalog for free and on-sale listings.
    By default the query is a plain aiohttp POST; with `use_browser` it is sent
    from a headless Chromium page via Playwright to get past bot detection.
    """

    def __init__(self, session: aiohttp.ClientSession, use_browser: bool = False, timeout: float = EPIC_REQUEST_TIMEOUT):
        super().__init__(session=session, timeout=timeout)
        self.use_browser = use_browser

    @staticmethod
    def _build_payload(country: str, locale: str) -> Dict[str, Any]:
        variables = {
            "category": EPIC_CATEGORY,
            "count": EPIC_RESULT_COUNT,
            "country": country,
            "locale": locale,
            "freeGame": True,
            "onSale": True,
        }
        return {"query": FREE_GAMES_QUERY, "variables": variables}

    async def _fetch_with_playwright(self, payload: Dict[str, Any]) -> Any:
        """Issues the GraphQL POST from inside a browser page."""
        logger.info(f"🚀 [{self.__class__.__name__}] Fetching catalog with Playwright...")
        browser = None
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch()
                page = await browser.new_page()
                result = await asyncio.wait_for(
                    page.evaluate(_BROWSER_FETCH_JS, [EPIC_GAMES_API_URL, payload]),
                    timeout=self._timeout.total
                )
        except asyncio.TimeoutError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Playwright timed out during fetch.")
            raise FetchError(f"error sending request: timed out after {self._timeout.total}s") from e
        except PlaywrightError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Playwright fetch failed: {e}")
            raise FetchError(f"error sending request: {e}") from e
        finally:
            if browser:
                await browser.close()

        if result.get('status') != 200:
            raise FetchError(f"bad status: {result.get('status')}, response: {result.get('body', '')[:MAX_ERROR_BODY_LENGTH]}")
        try:
            return json.loads(result.get('body', ''))
        except json.JSONDecodeError as e:
            raise FetchError(f"error decoding response: {e}") from e

    def _extract_elements(self, response_data: Any) -> List[CatalogElement]:
        """Pulls `data.Catalog.searchStore.elements` out of the response or raises FetchError."""
        try:
            elements = response_data['data']['Catalog']['searchStore']['elements']
        except (KeyError, TypeError):
            elements = None

        if not isinstance(elements, list):
            errors = response_data.get('errors') if isinstance(response_data, dict) else None
            detail = "; ".join(str(err.get('message', err)) for err in errors if isinstance(err, dict)) if errors else "missing catalog elements"
            logger.error(f"❌ [{self.__class__.__name__}] Unexpected response shape: {detail}")
            raise FetchError(f"error decoding response: {detail}")

        return [element for element in elements if isinstance(element, dict)]

    async def fetch_elements(self, country: str, locale: str) -> List[CatalogElement]:
        """Runs the catalog query once and returns the raw elements."""
        payload = self._build_payload(country, locale)
        if self.use_browser:
            response_data = await self._fetch_with_playwright(payload)
        else:
            response_data = await self._fetch(EPIC_GAMES_API_URL, method='POST', headers=COMMON_HEADERS, payload=payload)

        elements = self._extract_elements(response_data)
        logger.info(f"[{self.__class__.__name__}] Received {len(elements)} raw elements from API.")
        return elements

    async def fetch_free_games(
        self,
        country: str,
        locale: str,
        include_upcoming: bool,
        timezone_name: str,
        clock: Optional[Clock] = None
    ) -> List[GameData]:
        """Fetches the catalog and normalizes it into free / coming-soon game records."""
        elements = await self.fetch_elements(country, locale)
        return build_games(elements, include_upcoming, timezone_name, clock=clock)
