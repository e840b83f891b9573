"""
SQLite key-value storage for Game Price Tracker

Holds opaque string values under fixed keys:
- favorites (JSON array of deal snapshots)
"""

import os
import sqlite3
from contextlib import contextmanager
from typing import Optional

from config.settings import DATABASE_PATH


def ensure_db_dir(db_path: str) -> str:
    """Create the database directory if needed"""
    db_dir = os.path.dirname(db_path)
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir, exist_ok=True)
    return db_path


@contextmanager
def get_connection(db_path: str = DATABASE_PATH):
    """Context manager for database connections"""
    conn = sqlite3.connect(ensure_db_dir(db_path))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: str = DATABASE_PATH):
    """Initialize database tables"""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)


class KeyValueStore:
    """Durable get/set string store, one row per key"""

    def __init__(self, db_path: str = DATABASE_PATH):
        self.db_path = db_path
        init_db(self.db_path)

    def get_item(self, key: str) -> Optional[str]:
        with get_connection(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row['value'] if row else None

    def set_item(self, key: str, value: str):
        """Overwrite the value stored under key"""
        with get_connection(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
            """, (key, value))
