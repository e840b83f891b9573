from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum


class FetchStatus(Enum):
    OK = "ok"
    NO_RESULTS = "no_results"
    ERROR = "error"


class FetchError(Exception):
    """A single search attempt failed"""


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass
class Deal:
    """A single store listing for a game, as returned by the deals API"""
    game_id: str
    title: str
    store_id: str
    sale_price: float
    normal_price: float
    is_on_sale: bool
    savings: float = 0.0
    thumb: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Deal":
        """Build a Deal from a CheapShark JSON record (fields are not validated)"""
        sale_price = _to_float(data.get('salePrice'))
        normal_price = _to_float(data.get('normalPrice'))

        if 'isOnSale' in data:
            is_on_sale = _to_bool(data['isOnSale'])
        else:
            is_on_sale = sale_price < normal_price

        return cls(
            game_id=str(data.get('gameID', '')),
            title=str(data.get('title', '')),
            store_id=str(data.get('storeID', '')),
            sale_price=sale_price,
            normal_price=normal_price,
            is_on_sale=is_on_sale,
            savings=_to_float(data.get('savings')),
            thumb=data.get('thumb'),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the API's camelCase shape.

        Fields present in the source record keep their original values
        ("14.99" stays a string); modeled fields missing from it are filled in.
        """
        data = dict(self.raw)
        modeled = {
            'gameID': self.game_id,
            'title': self.title,
            'storeID': self.store_id,
            'salePrice': self.sale_price,
            'normalPrice': self.normal_price,
            'isOnSale': self.is_on_sale,
            'savings': self.savings,
            'thumb': self.thumb,
        }
        for key, value in modeled.items():
            data.setdefault(key, value)
        return data


@dataclass
class FetchResult:
    """Outcome of one search call chain, retries included"""
    status: FetchStatus
    deals: List[Deal] = field(default_factory=list)
    error: Optional[str] = None
    attempts: int = 0
    raw_count: int = 0

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK

    @property
    def no_results(self) -> bool:
        return self.status is FetchStatus.NO_RESULTS


class BaseScraper(ABC):
    """Base class for deal sources"""

    def __init__(self):
        self.name = "base"
        self.base_url = ""

    @abstractmethod
    async def fetch(self, query: str, retries: int = 3) -> FetchResult:
        """Search for deals matching query"""
        pass
