# ===== TYPES & INTERFACES =====
# Wire schema of the Epic Games Store `searchStore` GraphQL response.
# Every key is optional: the catalog omits or nulls fields freely, and the
# classification logic must tell a missing list apart from an empty one.

from typing import List, TypedDict


class DiscountSetting(TypedDict, total=False):
    discountType: str
    discountPercentage: int


class PromotionalOffer(TypedDict, total=False):
    startDate: str
    endDate: str
    discountSetting: DiscountSetting


class PromotionalOfferGroup(TypedDict, total=False):
    promotionalOffers: List[PromotionalOffer]


class Promotions(TypedDict, total=False):
    promotionalOffers: List[PromotionalOfferGroup]
    upcomingPromotionalOffers: List[PromotionalOfferGroup]


class FmtPrice(TypedDict, total=False):
    originalPrice: str
    discountPrice: str


class TotalPrice(TypedDict, total=False):
    fmtPrice: FmtPrice


class Price(TypedDict, total=False):
    totalPrice: TotalPrice


class KeyImage(TypedDict, total=False):
    type: str
    url: str


class PageMapping(TypedDict, total=False):
    pageSlug: str
    pageType: str


class CatalogNamespace(TypedDict, total=False):
    mappings: List[PageMapping]


class CustomAttribute(TypedDict, total=False):
    key: str
    value: str


class LinkedOffer(TypedDict, total=False):
    effectiveDate: str
    customAttributes: List[CustomAttribute]


class Category(TypedDict, total=False):
    path: str


class Seller(TypedDict, total=False):
    name: str


class CatalogElement(TypedDict, total=False):
    """One `Catalog.searchStore.elements[]` item, exactly as the API returns it."""
    title: str
    description: str
    seller: Seller
    keyImages: List[KeyImage]
    productSlug: str
    urlSlug: str
    url: str
    offerMappings: List[PageMapping]
    catalogNs: CatalogNamespace
    linkedOffer: LinkedOffer
    categories: List[Category]
    namespace: str
    id: str
    price: Price
    promotions: Promotions
