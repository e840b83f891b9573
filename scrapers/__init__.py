from .base import BaseScraper, Deal, FetchError, FetchResult, FetchStatus
from .cheapshark import CheapSharkScraper, FETCH_ERROR_MESSAGE, normalize_deals

__all__ = [
    'BaseScraper',
    'Deal',
    'FetchError',
    'FetchResult',
    'FetchStatus',
    'CheapSharkScraper',
    'FETCH_ERROR_MESSAGE',
    'normalize_deals',
]
