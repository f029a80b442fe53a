"""Key-value file counter storage built on dbm."""

from __future__ import annotations

import dbm
import logging
import os
import tempfile
import threading

from pushrelay.core import Storage

_log = logging.getLogger(__name__)


class LevelDBStorage(Storage):
    """Counters stored as decimal strings in a dbm database."""

    def __init__(self, path: str = ""):
        self.path = path
        self._db = None
        self._lock = threading.RLock()

    def init(self) -> None:
        if not self.path:
            self.path = os.path.join(tempfile.gettempdir(), "leveldb.db")
        self._db = dbm.open(self.path, "c")

    def _write(self, key: str, count: int) -> None:
        try:
            self._db[key.encode()] = str(count).encode()
        except (OSError, dbm.error[0] if isinstance(dbm.error, tuple) else dbm.error) as exc:
            _log.warning("LevelDB set error: %s", exc)

    def _read(self, key: str) -> int:
        try:
            return int(self._db.get(key.encode(), b"0"))
        except ValueError:
            return 0

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