"""
Scryfall API client.

Fetches card search results page by page, respecting Scryfall's rate limit
(10 requests/second). Callers get decoded card JSON; normalization happens
elsewhere.

API docs: https://scryfall.com/docs/api
"""

import asyncio
import logging
import time
from collections.abc import Callable
from functools import lru_cache
from typing import Any

import httpx

from scrygraph.config import settings

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[list[dict[str, Any]], int], None]


class ScryfallError(Exception):
    """Raised when a Scryfall request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_details(response: httpx.Response, default: str) -> str:
    """Scryfall error bodies carry a human-readable "details" field."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and isinstance(body.get("details"), str):
        return str(body["details"])
    return default


def _decode_json(response: httpx.Response) -> dict[str, Any]:
    """Decode a success body, which Scryfall always sends as a JSON object."""
    try:
        body = response.json()
    except ValueError as e:
        raise ScryfallError(
            "Scryfall returned a response that is not JSON",
            status_code=response.status_code,
        ) from e
    if not isinstance(body, dict):
        raise ScryfallError(
            "Scryfall returned an unexpected response",
            status_code=response.status_code,
        )
    return body


class ScryfallClient:
    """
    Minimal async Scryfall client.

    One instance keeps its own rate-limit clock, so share an instance
    between requests that should be throttled together.
    """

    def __init__(
        self,
        base_url: str | None = None,
        rate_limit_delay: float | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ):
        self.base_url = (base_url or settings.scryfall_api_base).rstrip("/")
        self.rate_limit_delay = (
            settings.scryfall_rate_limit_delay if rate_limit_delay is None else rate_limit_delay
        )
        self.timeout = settings.scryfall_timeout if timeout is None else timeout
        self.headers = {
            "Accept": "application/json",
            "User-Agent": user_agent or settings.scryfall_user_agent,
        }
        self._last_request = float("-inf")
        self._rate_limit_lock = asyncio.Lock()

    async def _rate_limit(self) -> None:
        # Held across the sleep so concurrent callers queue up one delay apart
        async with self._rate_limit_lock:
            elapsed = time.monotonic() - self._last_request
            if elapsed < self.rate_limit_delay:
                await asyncio.sleep(self.rate_limit_delay - elapsed)
            self._last_request = time.monotonic()

    async def search_cards(
        self,
        query: str,
        on_progress: ProgressCallback | None = None,
    ) -> list[dict[str, Any]]:
        """
        Run a Scryfall search and collect every page of results.

        Args:
            query: Scryfall search syntax (e.g., "t:dragon c:r")
            on_progress: Called after each page with the cards fetched so far
                and Scryfall's total card count

        Returns:
            Card objects in Scryfall's order

        Raises:
            ScryfallError: If any page request fails
        """
        cards: list[dict[str, Any]] = []
        url: str | None = f"{self.base_url}/cards/search"
        params: dict[str, str] | None = {"q": query}

        async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
            while url:
                await self._rate_limit()
                try:
                    response = await client.get(url, params=params)
                except httpx.HTTPError as e:
                    raise ScryfallError(f"Failed to reach Scryfall: {e}") from e

                if response.is_error:
                    raise ScryfallError(
                        _error_details(response, "Failed to fetch cards from Scryfall"),
                        status_code=response.status_code,
                    )

                page = _decode_json(response)
                data = page.get("data", [])
                if not isinstance(data, list):
                    raise ScryfallError(
                        "Unexpected search response from Scryfall",
                        status_code=response.status_code,
                    )
                cards.extend(data)
                total = page.get("total_cards")
                if not isinstance(total, int) or isinstance(total, bool):
                    total = len(cards)
                logger.debug("Fetched %d/%d cards for %r", len(cards), total, query)

                if on_progress is not None:
                    on_progress(cards, total)

                url = page.get("next_page") if page.get("has_more") else None
                params = None  # next_page already carries the query string

        return cards

    async def get_card_by_name(self, name: str) -> dict[str, Any]:
        """
        Fuzzy-match a single card by name.

        Raises:
            ScryfallError: If no card matches or the request fails
        """
        await self._rate_limit()
        async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/cards/named", params={"fuzzy": name}
                )
            except httpx.HTTPError as e:
                raise ScryfallError(f"Failed to reach Scryfall: {e}") from e

        if response.is_error:
            raise ScryfallError(
                _error_details(response, "Card not found"),
                status_code=response.status_code,
            )

        return _decode_json(response)


@lru_cache(maxsize=1)
def get_scryfall_client() -> ScryfallClient:
    """
    Shared client for the API, so every request shares one rate-limit clock.

    Override this dependency in tests to point at a mocked client.
    """
    return ScryfallClient()
