# ===== TYPES & INTERFACES =====

from typing import TypedDict

# --- Status values ---
STATUS_FREE = "free"
STATUS_COMING_SOON = "coming soon"

# --- Date precision values ---
PRECISION_EXACT = "exact"
PRECISION_ESTIMATED = "estimated"
PRECISION_UNKNOWN = "unknown"


class _RequiredGameData(TypedDict):
    title: str
    url: str
    status: str
    start_date: str
    end_date: str
    date_precision: str


class GameData(_RequiredGameData, total=False):
    """
    Defines the normalized record produced for every free or upcoming-free game.
    The optional keys are left out entirely when the upstream value is empty,
    which keeps the JSON served by the API identical to what clients expect.

    Attributes:
        title (str): The title of the game as listed in the store.
        url (str): Canonical store page URL built from the best available slug.
        status (str): 'free' while the promotion runs, 'coming soon' before it starts.
        start_date (str): Formatted start of the free window, or 'Unknown'.
        end_date (str): Formatted end of the free window, or 'Unknown'.
        date_precision (str): 'exact', 'estimated' or 'unknown'.

        description (str): Store description of the game.
        image_url (str): Thumbnail or box-art URL.
        publisher (str): Seller name shown on the store page.
    """
    description: str
    image_url: str
    publisher: str
