"""
Favorites - user-bookmarked deals

The list lives in memory and is written back in full to the key-value
store after every change. The same deal may be added more than once.
"""

import json
import logging
import sqlite3
from typing import List, Optional

from config.settings import FAVORITES_KEY
from scrapers.base import Deal
from .database import KeyValueStore

logger = logging.getLogger(__name__)


class FavoritesStore:
    """In-memory favorites list backed by durable key-value storage"""

    def __init__(self, storage: Optional[KeyValueStore] = None, key: str = FAVORITES_KEY):
        self.storage = storage if storage is not None else KeyValueStore()
        self.key = key
        self._favorites: List[Deal] = []

    @property
    def favorites(self) -> List[Deal]:
        return list(self._favorites)

    def load(self) -> List[Deal]:
        """Read favorites from storage; missing or malformed data gives an empty list"""
        self._favorites = self._read()
        return self.favorites

    def add(self, deal: Deal) -> List[Deal]:
        self._favorites = self._favorites + [deal]
        self._write()
        return self.favorites

    def remove(self, game_id: str) -> List[Deal]:
        """Drop every favorite with this gameID"""
        self._favorites = [deal for deal in self._favorites if deal.game_id != game_id]
        self._write()
        return self.favorites

    def contains(self, game_id: str) -> bool:
        return any(deal.game_id == game_id for deal in self._favorites)

    def _read(self) -> List[Deal]:
        try:
            payload = self.storage.get_item(self.key)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not read favorites: %s", e)
            return []

        if payload is None:
            return []

        try:
            records = json.loads(payload)
        except ValueError as e:
            logger.warning("Ignoring malformed favorites data: %s", e)
            return []

        if not isinstance(records, list):
            logger.warning("Ignoring favorites data of type %s", type(records).__name__)
            return []

        return [Deal.from_api(record) for record in records if isinstance(record, dict)]

    def _write(self):
        payload = json.dumps([deal.to_dict() for deal in self._favorites])
        try:
            self.storage.set_item(self.key, payload)
        except (sqlite3.Error, OSError) as e:
            # In-memory list stays authoritative until the next successful write
            logger.warning("Could not save %d favorites: %s", len(self._favorites), e)
