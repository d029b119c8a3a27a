"""
SQLite-backed string key/value store for drafts and audit history.
"""
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

DATABASE_PATH = os.getenv("DATABASE_PATH", "gbp_audit.db")


class KeyValueStore:
    """
    Flat string -> string store.

    Every call opens its own connection, so a new instance on the same path
    sees everything written before.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = str(path or DATABASE_PATH)
        self._init_table()

    @contextmanager
    def _connection(self):
        """Database connection context manager."""
        conn = sqlite3.connect(self.path)
        try:
            yield conn
        finally:
            conn.close()

    def _init_table(self):
        with self._connection() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            conn.commit()

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        _check_text("key", key)
        with self._connection() as conn:
            row = conn.execute(
                'SELECT value FROM kv_store WHERE key = ?', (key,)
            ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str):
        _check_text("key", key)
        _check_text("value", value)
        with self._connection() as conn:
            conn.execute('''
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
            ''', (key, value))
            conn.commit()

    def remove(self, key: str):
        _check_text("key", key)
        with self._connection() as conn:
            conn.execute('DELETE FROM kv_store WHERE key = ?', (key,))
            conn.commit()


def _check_text(name: str, value):
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")
