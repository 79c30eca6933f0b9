# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import Iterable, Optional

from epic_free_games.config import EPIC_STORE_PAGE_URL, FREE_PRICE_LITERALS, IMAGE_TYPES
from epic_free_games.models.epic import CatalogElement, KeyImage, PageMapping

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== UTILITY FUNCTIONS =====

def select_image_url(key_images: Optional[Iterable[KeyImage]]) -> Optional[str]:
    """
    Returns the URL of the first thumbnail-like image in upstream order.
    Position decides, not the label: a 'DieselGameBox' listed before a
    'Thumbnail' wins.
    """
    for img in key_images or []:
        if isinstance(img, dict) and img.get('type') in IMAGE_TYPES:
            return img.get('url') or None
    return None


def _first_page_slug(mappings: Optional[Iterable[PageMapping]]) -> Optional[str]:
    for mapping in mappings or []:
        if not isinstance(mapping, dict):
            continue
        slug = mapping.get('pageSlug')
        if slug:
            return slug
    return None


def resolve_page_slug(game_element: CatalogElement) -> str:
    """
    Picks the store page slug: offer mappings first, then the catalog
    namespace mappings. An empty string means neither had one.
    """
    slug = _first_page_slug(game_element.get('offerMappings'))
    if slug is None:
        catalog_ns = game_element.get('catalogNs') or {}
        slug = _first_page_slug(catalog_ns.get('mappings'))
    return slug or ""


def resolve_store_url(game_element: CatalogElement) -> str:
    """Builds the canonical store URL. Without a slug the last path segment is left empty."""
    slug = resolve_page_slug(game_element)
    if not slug:
        logger.debug(f"[resolve_store_url] No page slug found for '{game_element.get('title', '')}'.")
    return EPIC_STORE_PAGE_URL.format(slug=slug)


def get_discount_price(game_element: CatalogElement) -> str:
    """Returns the formatted discount price, or an empty string when the catalog omits it."""
    price = game_element.get('price') or {}
    fmt_price = (price.get('totalPrice') or {}).get('fmtPrice') or {}
    return fmt_price.get('discountPrice') or ""


def is_free_price(price: str) -> bool:
    """True for '$0.00', '0', '' or any text mentioning 'free' (case-insensitive)."""
    return price in FREE_PRICE_LITERALS or 'free' in price.lower()
