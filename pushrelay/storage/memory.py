"""In-memory counter storage."""

from __future__ import annotations

import threading

from pushrelay.core import Storage


class MemoryStorage(Storage):
    """Counters held in a dictionary, guarded by a lock."""

    def __init__(self):
        self._values: dict[str, int] = {}
        self._lock = threading.Lock()

    def init(self) -> None:
        pass

    def add(self, key: str, count: int) -> None:
        with self._lock:
            self._values[key] = self._values.get(key, 0) + count

    def set(self, key: str, count: int) -> None:
        with self._lock:
            self._values[key] = count

    def get(self, key: str) -> int:
        with self._lock:
            return self._values.setdefault(key, 0)

    def close(self) -> None:
        pass