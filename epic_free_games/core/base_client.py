# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from epic_free_games.config import COMMON_HEADERS

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

MAX_ERROR_BODY_LENGTH = 500


# ===== TYPES & INTERFACES =====
class EpicFreeGamesError(Exception):
    """Base class for failures that abort an invocation."""


class FetchError(EpicFreeGamesError):
    """The upstream catalog could not be reached or its response could not be decoded."""


class NotificationError(EpicFreeGamesError):
    """The webhook rejected the notification or could not be reached."""


# ===== CORE BUSINESS LOGIC =====
class BaseWebClient:
    """
    A base class for web clients sharing one aiohttp session.
    Requests are single-shot with a bounded timeout; failures are raised, never retried.
    """

    def __init__(self, session: aiohttp.ClientSession, timeout: float):
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        logger.debug(f"[{self.__class__.__name__}] Initialized with timeout: {timeout}s")

    async def _fetch(
        self,
        url: str,
        method: str = 'GET',
        headers: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Sends one request and returns the decoded JSON body.
        Raises FetchError on network errors, timeouts, non-200 responses and invalid JSON.
        """
        logger.info(f"➡️ [{self.__class__.__name__}] Fetching from network: {url}")
        request_headers = headers or COMMON_HEADERS

        try:
            async with self._session.request(method, url, headers=request_headers, json=payload, timeout=self._timeout) as response:
                body = await response.text()
                if response.status != 200:
                    logger.warning(f"⚠️ [{self.__class__.__name__}] HTTP error on {url}: Status {response.status}")
                    raise FetchError(f"bad status: {response.status}, response: {body[:MAX_ERROR_BODY_LENGTH]}")
        except asyncio.TimeoutError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Request to {url} timed out.")
            raise FetchError(f"error sending request: timed out after {self._timeout.total}s") from e
        except aiohttp.ClientError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Network error on {url}: {type(e).__name__}")
            raise FetchError(f"error sending request: {e}") from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Invalid JSON received from {url}.")
            raise FetchError(f"error decoding response: {e}") from e
