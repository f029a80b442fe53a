import threading

from pushrelay.core import HUAWEI_SUCCESS_KEY
from pushrelay.storage.leveldb import LevelDBStorage


def test_leveldb_engine(tmp_path):
    store = LevelDBStorage(str(tmp_path / "level.db"))
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


def test_missing_key_is_zero(tmp_path):
    store = LevelDBStorage(str(tmp_path / "level.db"))
    store.init()
    assert store.get("missing") == 0
    store.close()