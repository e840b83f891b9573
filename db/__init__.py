# Database module - uses native SQLite for simplicity
from .database import (
    init_db,
    get_connection,
    KeyValueStore
)
from .favorites import FavoritesStore

__all__ = [
    'init_db',
    'get_connection',
    'KeyValueStore',
    'FavoritesStore'
]
