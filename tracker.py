"""
Game Price Tracker - search state and favorites for one user session

Holds what the dashboard shows: the current result set, loading/error/no
results flags, filter selections and the favorites list.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from config.settings import DEFAULT_RETRIES
from db.favorites import FavoritesStore
from scrapers.base import BaseScraper, Deal, FetchResult, FetchStatus
from scrapers.cheapshark import CheapSharkScraper
from utils.deal_filters import FilterState, apply_filters

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Search state shared with the presentation layer"""
    search_term: str = ""
    deals: List[Deal] = field(default_factory=list)
    is_loading: bool = False
    error: Optional[str] = None
    no_results: bool = False
    filters: FilterState = field(default_factory=FilterState)


class DealTracker:
    """Runs searches, keeps AppState current and manages favorites"""

    def __init__(
        self,
        scraper: Optional[BaseScraper] = None,
        favorites: Optional[FavoritesStore] = None,
        retries: int = DEFAULT_RETRIES,
    ):
        self.scraper = scraper if scraper is not None else CheapSharkScraper()
        self.favorites_store = favorites if favorites is not None else FavoritesStore()
        self.retries = retries
        self.state = AppState()
        self._generation = 0

        self.favorites_store.load()

    async def search(self, query: str) -> Optional[FetchResult]:
        """
        Search for deals and update state.

        An empty query does nothing. If another search starts before this
        one finishes, this result is dropped and the newer search owns the
        state.
        """
        if not query:
            return None

        self._generation += 1
        generation = self._generation

        self.state.search_term = query
        self.state.deals = []
        self.state.is_loading = True
        self.state.error = None
        self.state.no_results = False

        result = await self.scraper.fetch(query, self.retries)

        if generation != self._generation:
            logger.debug("Dropping stale results for %r", query)
            return result

        if result.status is FetchStatus.OK:
            self.state.deals = list(result.deals)
        elif result.status is FetchStatus.NO_RESULTS:
            self.state.no_results = True
        else:
            self.state.error = result.error

        self.state.is_loading = False
        return result

    def update_filters(
        self,
        sort_option: Optional[str] = None,
        platform_filter: Optional[str] = None,
        min_price=None,
        max_price=None,
    ) -> FilterState:
        """Set the given filter fields, leave the others as they are"""
        filters = self.state.filters
        if sort_option is not None:
            filters.sort_option = sort_option
        if platform_filter is not None:
            filters.platform_filter = platform_filter
        if min_price is not None:
            filters.min_price = min_price
        if max_price is not None:
            filters.max_price = max_price
        return filters

    def visible_deals(self) -> List[Deal]:
        if self.state.is_loading or self.state.error or self.state.no_results:
            return []
        return apply_filters(self.state.deals, self.state.filters)

    def find_deal(self, game_id: str) -> Optional[Deal]:
        for deal in self.state.deals:
            if deal.game_id == game_id:
                return deal
        return None

    @property
    def favorites(self) -> List[Deal]:
        return self.favorites_store.favorites

    def add_favorite(self, deal: Deal) -> List[Deal]:
        return self.favorites_store.add(deal)

    def remove_favorite(self, game_id: str) -> List[Deal]:
        return self.favorites_store.remove(game_id)
