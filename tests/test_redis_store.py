import threading

import pytest
import redis

from pushrelay.core import HUAWEI_SUCCESS_KEY
from pushrelay.storage.redis_store import RedisStorage


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.lock = threading.Lock()
        self.closed = False

    def ping(self):
        return True

    def incrby(self, key, count):
        with self.lock:
            self.data[key] = int(self.data.get(key, b"0")) + count
            self.data[key] = str(self.data[key]).encode()

    def set(self, key, value):
        self.data[key] = str(value).encode()

    def get(self, key):
        return self.data.get(key)

    def close(self):
        self.closed = True


def test_redis_server_error():
    store = RedisStorage("127.0.0.1:1")
    with pytest.raises(redis.RedisError):
        store.init()


def test_redis_engine():
    fake = FakeRedis()
    store = RedisStorage("redis:6379", client=fake)
    store.init()
    store.set(HUAWEI_SUCCESS_KEY, 0)
    assert store.get(HUAWEI_SUCCESS_KEY) == 0
    store.add(HUAWEI_SUCCESS_KEY, 10)
    assert store.get(HUAWEI_SUCCESS_KEY) == 10
    store.add(HUAWEI_SUCCESS_KEY, 10)
    assert store.get(HUAWEI_SUCCESS_KEY) == 20
    store.set(HUAWEI_SUCCESS_KEY, 0)
    assert store.get(HUAWEI_SUCCESS_KEY) == 0
    threads = [threading.Thread(target=store.add, args=(HUAWEI_SUCCESS_KEY, 1)) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert store.get(HUAWEI_SUCCESS_KEY) == 10
    store.close()
    assert fake.closed


def test_missing_key_is_zero():
    store = RedisStorage(client=FakeRedis())
    store.init()
    assert store.get("missing") == 0