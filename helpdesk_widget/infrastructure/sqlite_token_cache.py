from __future__ import annotations
import sqlite3
import time
from pathlib import Path
from typing import Callable
from helpdesk_widget.shared.errors import TokenCacheError


class SQLiteTokenCache:
    """TTL token cache stored in a SQLite file, shared by every process using it."""

    def __init__(self, db_path: Path, clock: Callable[[], float] = time.time) -> None:
        self._db_path = db_path
        self._clock = clock
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(self._db_path)
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS tokens (
                        cache_key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        expires_at REAL NOT NULL
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise TokenCacheError("Failed to initialize token cache database") from exc

    def get(self, key: str) -> str | None:
        now = self._clock()

        try:
            conn = sqlite3.connect(self._db_path)
            try:
                cur = conn.execute(
                    "SELECT value FROM tokens WHERE cache_key = ? AND expires_at > ?",
                    (key, now),
                )
                row = cur.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise TokenCacheError("Failed to read from token cache database") from exc

        if row is None:
            return None

        value: str = row[0]
        return value

    def put(self, key: str, value: str, ttl_minutes: int) -> None:
        if ttl_minutes <= 0:
            self.forget(key)
            return

        expires_at = self._clock() + ttl_minutes * 60

        try:
            conn = sqlite3.connect(self._db_path)
            try:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO tokens (cache_key, value, expires_at)
                    VALUES (?, ?, ?)
                    """,
                    (key, value, expires_at),
                )
                # expired rows are never read again
                conn.execute("DELETE FROM tokens WHERE expires_at <= ?", (self._clock(),))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise TokenCacheError("Failed to write to token cache database") from exc

    def forget(self, key: str) -> None:
        try:
            conn = sqlite3.connect(self._db_path)
            try:
                conn.execute("DELETE FROM tokens WHERE cache_key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise TokenCacheError("Failed to delete from token cache database") from exc
