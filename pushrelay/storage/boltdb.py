"""File-backed counter storage with named buckets, kept in SQLite."""

from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
import threading

from pushrelay.core import Storage

_log = logging.getLogger(__name__)


class BoltDBStorage(Storage):
    """Counters in one bucket of a single database file."""

    def __init__(self, path: str = "", bucket: str = "gorush"):
        self.path = path
        self.bucket = bucket
        self._db: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def _table(self) -> str:
        return '"' + self.bucket.replace('"', '""') + '"'

    def init(self) -> None:
        if not self.path:
            self.path = os.path.join(tempfile.gettempdir(), "boltdb.db")
        self._db = sqlite3.connect(self.path, check_same_thread=False)
        with self._db:
            self._db.execute(
                f"CREATE TABLE IF NOT EXISTS {self._table} (key TEXT PRIMARY KEY, value INTEGER)"
            )

    def _write(self, key: str, count: int) -> None:
        try:
            with self._db:
                self._db.execute(
                    f"INSERT OR REPLACE INTO {self._table} (key, value) VALUES (?, ?)",
                    (key, count),
                )
        except sqlite3.Error as exc:
            _log.warning("BoltDB set error: %s", exc)

    def _read(self, key: str) -> int:
        try:
            row = self._db.execute(
                f"SELECT value FROM {self._table} WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as exc:
            _log.warning("BoltDB get error: %s", exc)
            return 0
        if row is None:
            _log.warning("BoltDB get error: not found")
            return 0
        return int(row[0])

    def add(self, key: str, count: int) -> None:
        with self._lock:
            self._write(key, self._read(key) + count)

    def set(self, key: str, count: int) -> None:
        with self._lock:
            self._write(key, count)

    def get(self, key: str) -> int:
        with self._lock:
            return self._read(key)

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None