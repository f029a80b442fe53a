"""Redis-backed counter storage."""

from __future__ import annotations

import redis
from redis.cluster import ClusterNode, RedisCluster

from pushrelay.core import Storage


def _split_addr(addr: str) -> tuple[str, int]:
    host, _, port = addr.rpartition(":")
    return (host or "localhost"), int(port or 6379)


class RedisStorage(Storage):
    """Counters kept in Redis, single node or cluster."""

    def __init__(self, addr="localhost:6379", username="", password="", db=0,
                 cluster=False, client=None):
        self.addr = addr
        self.username = username
        self.password = password
        self.db = db
        self.cluster = cluster
        self._client = client

    def init(self) -> None:
        if self._client is None:
            if self.cluster:
                nodes = [ClusterNode(*_split_addr(a)) for a in self.addr.split(",")]
                self._client = RedisCluster(
                    startup_nodes=nodes,
                    username=self.username or None,
                    password=self.password or None,
                )
            else:
                host, port = _split_addr(self.addr)
                self._client = redis.Redis(
                    host=host, port=port, password=self.password or None, db=self.db,
                    socket_connect_timeout=5,
                )
        self._client.ping()

    def add(self, key: str, count: int) -> None:
        self._client.incrby(key, count)

    def set(self, key: str, count: int) -> None:
        self._client.set(key, count)

    def get(self, key: str) -> int:
        try:
            value = self._client.get(key)
            return int(value) if value is not None else 0
        except (redis.RedisError, ValueError):
            return 0

    def close(self) -> None:
        if self._client is not None:
            self._client.close()