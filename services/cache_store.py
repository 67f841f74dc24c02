"""
Key/value cache stores for the loaded agency dataset.

Values are stored as JSON text, so a get after a set returns an equal value,
never the same object. Neither store raises from get/set/remove.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Dict

from db import schema


logger = logging.getLogger(__name__)

_WRITE_ERRORS = (TypeError, ValueError, OverflowError, sqlite3.Error, OSError)


class MemoryCacheStore:
    """In-process store used by tests and `--no-cache` style runs."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._items.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            return default

    def set(self, key: str, value: Any) -> None:
        try:
            self._items[key] = json.dumps(value, ensure_ascii=False)
        except _WRITE_ERRORS as e:
            logger.warning(f"Failed to save cache key {key}", extra={"step": "cache_set", "status": "error", "error": str(e)})

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class SqliteCacheStore:
    """Persistent store backed by the cache_entries table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        schema.bootstrap(conn)

    def get(self, key: str, default: Any = None) -> Any:
        try:
            cur = self.conn.cursor()
            cur.execute("SELECT value FROM cache_entries WHERE key = ?", (key,))
            row = cur.fetchone()
            if not row:
                return default
            return json.loads(row[0])
        except (sqlite3.Error, ValueError, TypeError) as e:
            logger.debug(f"Cache read failed for {key}", extra={"step": "cache_get", "status": "miss", "error": str(e)})
            return default

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
            self.conn.execute(
                (
                    "INSERT INTO cache_entries (key, value, updated_at) VALUES (?, ?, datetime('now')) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at"
                ),
                (key, payload),
            )
            self.conn.commit()
        except _WRITE_ERRORS as e:
            self._rollback()
            logger.warning(f"Failed to save cache key {key}", extra={"step": "cache_set", "status": "error", "error": str(e)})

    def remove(self, key: str) -> None:
        try:
            self.conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
            self.conn.commit()
        except sqlite3.Error as e:
            self._rollback()
            logger.warning(f"Failed to remove cache key {key}", extra={"step": "cache_remove", "status": "error", "error": str(e)})

    def _rollback(self) -> None:
        try:
            self.conn.rollback()
        except sqlite3.Error:
            pass
