"""Append-only file counter storage."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading

from pushrelay.core import Storage

_log = logging.getLogger(__name__)


class BuntDBStorage(Storage):
    """Counters held in memory and persisted to an append-only file."""

    def __init__(self, path: str = ""):
        self.path = path
        self._values: dict[str, str] = {}
        self._file = None
        self._lock = threading.RLock()

    def init(self) -> None:
        if not self.path:
            self.path = os.path.join(tempfile.gettempdir(), "buntdb.db")
        self._values = {}
        if os.path.exists(self.path):
            with open(self.path, encoding="utf-8") as fh:
                for line in fh:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        record = json.loads(line)
                        self._values[record["k"]] = record["v"]
                    except (ValueError, KeyError, TypeError):
                        continue
        self._file = open(self.path, "a", encoding="utf-8")

    def _write(self, key: str, count: int) -> None:
        value = str(count)
        try:
            self._file.write(json.dumps({"k": key, "v": value}) + "\n")
            self._file.flush()
        except (OSError, AttributeError) as exc:
            _log.warning("BuntDB update error: %s", exc)
            return
        self._values[key] = value

    def _read(self, key: str) -> int:
        try:
            return int(self._values.get(key, "0"))
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
        if self._file is not None:
            self._file.close()
            self._file = None