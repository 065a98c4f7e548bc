"""
SQLite Key-Value Store

단일 kv 테이블 (key TEXT PRIMARY KEY, value TEXT)
"""

import sqlite3
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from .base import KeyValueStore, StorageError


class SqliteKeyValueStore(KeyValueStore):
    """SQLite 파일 기반 저장소"""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        if not self._initialized:
            conn.execute("CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)")
            conn.commit()
            self._initialized = True
            logger.info(f"[Storage] SQLite kv table ready: {self.db_path}")
        return conn

    def _run(self, sql: str, params: tuple = (), fetch: bool = False):
        try:
            conn = self._connect()
            try:
                cur = conn.execute(sql, params)
                rows = cur.fetchall() if fetch else None
                conn.commit()
                return rows
            finally:
                conn.close()
        except (sqlite3.Error, UnicodeError) as e:
            raise StorageError(f"sqlite error: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        rows = self._run("SELECT value FROM kv WHERE key = ?", (key,), fetch=True)
        return rows[0][0] if rows else None

    def set_item(self, key: str, value: str):
        self._run(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )

    def remove_item(self, key: str):
        self._run("DELETE FROM kv WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        rows = self._run("SELECT key FROM kv", fetch=True)
        return [row[0] for row in rows]
