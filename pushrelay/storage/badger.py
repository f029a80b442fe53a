"""Directory-based counter storage built on dbm."""

from __future__ import annotations

import dbm
import logging
import os
import tempfile
import threading

from pushrelay.core import Storage

_log = logging.getLogger(__name__)


class BadgerStorage(Storage):
    """Counters kept in a database inside a dedicated directory."""

    name = "badger"

    def __init__(self, path: str = ""):
        self.path = path
        self._db = None
        self._lock = threading.RLock()

    def init(self) -> None:
        if not self.path:
            self.path = os.path.join(tempfile.gettempdir(), "badger")
        os.makedirs(self.path, exist_ok=True)
        self._db = dbm.open(os.path.join(self.path, "data"), "c")

    def _write(self, key: str, count: int) -> None:
        try:
            self._db[key.encode()] = str(count).encode()
        except Exception as exc:  # noqa: BLE001 - backend errors are logged, as reads are
            _log.warning("%s update error: %s", self.name, exc)

    def _read(self, key: str) -> int:
        raw = self._db.get(key.encode())
        if raw is None:
            _log.warning("%s get error: Key not found", self.name)
            return 0
        try:
            return int(raw)
        except ValueError as exc:
            _log.warning("%s get error: %s", self.name, exc)
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