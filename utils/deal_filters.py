"""
Deal Filters - platform, price range and sort ordering

Pure functions over a list of deals and the user's current FilterState.
The same inputs always give the same ordered output.
"""

import re
import sys
from dataclasses import dataclass
from typing import List, Optional, Union

from scrapers.base import Deal
from .currency import to_display
from .stores import store_name_for

SORT_BY_PRICE = "price"
SORT_BY_DISCOUNT = "discount"
SORT_OPTIONS = (SORT_BY_PRICE, SORT_BY_DISCOUNT)

PLATFORM_ALL = "all"
PLATFORM_OPTIONS = (PLATFORM_ALL, "Steam", "GOG")

MIN_PRICE_BOUND = 0.0
MAX_PRICE_BOUND = sys.float_info.max

PriceBound = Optional[Union[str, int, float]]

_LEADING_NUMBER = re.compile(r'^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))')


@dataclass
class FilterState:
    """User's current sort/platform/price-range selections"""
    sort_option: str = SORT_BY_PRICE
    platform_filter: str = PLATFORM_ALL
    min_price: PriceBound = None  # display currency
    max_price: PriceBound = None  # display currency


def parse_bound(value: PriceBound, default: float) -> float:
    """
    Read a price bound the way a number form field is read.

    Strings use their leading number ("10abc" -> 10, "Infinity" -> inf).
    Absent, blank, unparseable and zero bounds fall back to `default`.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return default
        number = float(match.group(1))

    if number != number or number == 0:  # NaN or zero
        return default
    return number


def filter_by_platform(deals: List[Deal], platform: str) -> List[Deal]:
    if platform == PLATFORM_ALL:
        return list(deals)
    return [deal for deal in deals if store_name_for(deal.store_id) == platform]


def filter_by_price(deals: List[Deal], min_price: PriceBound = None, max_price: PriceBound = None) -> List[Deal]:
    """Keep deals whose display-currency sale price lies within the bounds"""
    low = parse_bound(min_price, MIN_PRICE_BOUND)
    high = parse_bound(max_price, MAX_PRICE_BOUND)
    return [deal for deal in deals if low <= to_display(deal.sale_price) <= high]


def sort_deals(deals: List[Deal], sort_option: str) -> List[Deal]:
    """Stable sort; unknown options keep the incoming order"""
    if sort_option == SORT_BY_PRICE:
        return sorted(deals, key=lambda d: d.sale_price)
    if sort_option == SORT_BY_DISCOUNT:
        return sorted(deals, key=lambda d: d.savings, reverse=True)
    return list(deals)


def apply_filters(deals: List[Deal], state: FilterState) -> List[Deal]:
    """Platform filter, then price range, then sort"""
    filtered = filter_by_platform(deals, state.platform_filter)
    filtered = filter_by_price(filtered, state.min_price, state.max_price)
    return sort_deals(filtered, state.sort_option)
