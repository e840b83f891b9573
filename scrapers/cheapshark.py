"""
CheapShark Deals Scraper

JSON API, no browser needed. Searches deals by title and keeps only the
storefronts the tracker supports (Steam and GOG).
"""

import asyncio
import logging
import random
from typing import List, Optional

import httpx

from config.settings import CHEAPSHARK_API_URL, DEFAULT_RETRIES, REQUEST_TIMEOUT, RETRY_BACKOFF
from utils.stores import SUPPORTED_STORE_IDS
from .base import BaseScraper, Deal, FetchError, FetchResult, FetchStatus

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch game prices after several attempts. Please try again later."


def normalize_deals(deals: List[Deal]) -> List[Deal]:
    """Keep only deals from supported stores, in their original order"""
    return [deal for deal in deals if deal.store_id in SUPPORTED_STORE_IDS]


class CheapSharkScraper(BaseScraper):
    """HTTP client for the CheapShark deals search"""

    def __init__(
        self,
        base_url: str = CHEAPSHARK_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        retry_backoff: float = RETRY_BACKOFF,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        self.name = "cheapshark"
        self.base_url = base_url.rstrip('/')
        self.search_url = f"{self.base_url}/deals"
        self.timeout = timeout
        self.retry_backoff = retry_backoff
        self.transport = transport
        self.headers = {
            'Accept': 'application/json',
            'User-Agent': 'game-price-tracker/1.0',
        }

    async def fetch(self, query: str, retries: int = DEFAULT_RETRIES) -> FetchResult:
        """
        Search CheapShark for deals matching query.

        Failed attempts are retried with the same query until `retries` is
        used up, so a call makes at most `retries + 1` requests. A 2xx
        response whose body is not a JSON array is not retried.
        """
        attempts = 0
        remaining = max(retries, 0)

        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            while True:
                attempts += 1
                try:
                    response = await self._request(client, query)
                except FetchError as e:
                    if remaining > 0:
                        logger.warning(
                            "CheapShark attempt %d for %r failed: %s (%d retries left)",
                            attempts, query, e, remaining,
                        )
                        remaining -= 1
                        await self._backoff()
                        continue
                    logger.error("CheapShark search for %r failed after %d attempts: %s", query, attempts, e)
                    return FetchResult(status=FetchStatus.ERROR, error=FETCH_ERROR_MESSAGE, attempts=attempts)
                break

        try:
            data = response.json()
        except ValueError as e:
            logger.error("CheapShark returned undecodable body for %r: %s", query, e)
            return FetchResult(status=FetchStatus.ERROR, error=FETCH_ERROR_MESSAGE, attempts=attempts)

        if not isinstance(data, list):
            logger.error("CheapShark returned %s instead of a list for %r", type(data).__name__, query)
            return FetchResult(status=FetchStatus.ERROR, error=FETCH_ERROR_MESSAGE, attempts=attempts)

        return self._build_result(query, data, attempts)

    async def _request(self, client: httpx.AsyncClient, query: str) -> httpx.Response:
        try:
            response = await client.get(self.search_url, params={'title': query}, headers=self.headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(str(e) or type(e).__name__) from e
        return response

    async def _backoff(self):
        if self.retry_backoff > 0:
            await asyncio.sleep(random.uniform(0, self.retry_backoff))

    def _build_result(self, query: str, data: list, attempts: int) -> FetchResult:
        if not data:
            logger.info("CheapShark: no deals for %r", query)
            return FetchResult(status=FetchStatus.NO_RESULTS, attempts=attempts)

        deals = normalize_deals([Deal.from_api(record) for record in data if isinstance(record, dict)])
        logger.info("CheapShark: %d deals for %r, %d from supported stores", len(data), query, len(deals))

        if not deals:
            return FetchResult(status=FetchStatus.NO_RESULTS, attempts=attempts, raw_count=len(data))

        return FetchResult(status=FetchStatus.OK, deals=deals, attempts=attempts, raw_count=len(data))


# CLI entry point
if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m scrapers.cheapshark <search query>")
        sys.exit(1)

    query = " ".join(sys.argv[1:])
    print(f"Searching CheapShark for: {query}")

    result = asyncio.run(CheapSharkScraper().fetch(query))
    if result.error:
        print(result.error)
    for deal in result.deals:
        print(f"${deal.sale_price:.2f} - {deal.title} ({deal.store_id})")
