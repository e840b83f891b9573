from .currency import to_display, format_price
from .stores import store_name_for, STORE_NAMES, SUPPORTED_STORE_IDS, UNKNOWN_STORE
from .deal_filters import (
    FilterState,
    apply_filters,
    filter_by_platform,
    filter_by_price,
    parse_bound,
    sort_deals
)

__all__ = [
    'to_display',
    'format_price',
    'store_name_for',
    'STORE_NAMES',
    'SUPPORTED_STORE_IDS',
    'UNKNOWN_STORE',
    'FilterState',
    'apply_filters',
    'filter_by_platform',
    'filter_by_price',
    'parse_bound',
    'sort_deals'
]
