"""Shared fixtures: CheapShark-shaped records, fake HTTP transports, temp storage."""

from typing import Callable, List

import httpx
import pytest

from db.database import KeyValueStore
from db.favorites import FavoritesStore
from scrapers.base import BaseScraper, Deal
from scrapers.cheapshark import CheapSharkScraper


def make_record(game_id: str, store_id: str = "1", sale: float = 9.99, normal: float = 19.99,
                savings: float = 50.0, title: str = None) -> dict:
    """A deal record shaped like the CheapShark /deals response"""
    return {
        "internalName": (title or f"GAME{game_id}").upper(),
        "title": title or f"Game {game_id}",
        "dealID": f"deal-{game_id}-{store_id}",
        "storeID": store_id,
        "gameID": game_id,
        "salePrice": f"{sale:.2f}",
        "normalPrice": f"{normal:.2f}",
        "isOnSale": "1" if sale < normal else "0",
        "savings": f"{savings:.6f}",
        "thumb": f"https://cdn.example.com/{game_id}.jpg",
    }


def make_deal(game_id: str, **kwargs) -> Deal:
    return Deal.from_api(make_record(game_id, **kwargs))


class StubScraper(BaseScraper):
    """Returns queued results; optionally waits on an event per query"""

    def __init__(self, results=None):
        super().__init__()
        self.results = dict(results or {})
        self.gates = {}
        self.calls = []

    async def fetch(self, query, retries=3):
        self.calls.append((query, retries))
        if query in self.gates:
            await self.gates[query].wait()
        return self.results[query]


class CountingTransport(httpx.AsyncBaseTransport):
    """Replays a handler and records every request it sees"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def kv_store(tmp_path) -> KeyValueStore:
    return KeyValueStore(str(tmp_path / "tracker.db"))


@pytest.fixture
def favorites_store(kv_store) -> FavoritesStore:
    store = FavoritesStore(kv_store)
    store.load()
    return store


@pytest.fixture
def scraper_for():
    """Build a CheapSharkScraper whose HTTP traffic goes to `handler`"""

    def _build(handler):
        transport = CountingTransport(handler)
        scraper = CheapSharkScraper(base_url="https://api.test/1.0", transport=transport)
        return scraper, transport

    return _build
