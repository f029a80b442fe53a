"""Push counters and application status."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from pushrelay import core, logx
from pushrelay.core import Storage

stat_storage: "StateStorage | None" = None


@dataclass
class PlatformStatus:
    """Success and error counts for one platform."""

    push_success: int = 0
    push_error: int = 0


@dataclass
class AppStatus:
    """Snapshot of the server's queue and push counters."""

    version: str = ""
    busy_workers: int = 0
    success_tasks: int = 0
    failure_tasks: int = 0
    submitted_tasks: int = 0
    total_count: int = 0
    ios: PlatformStatus = field(default_factory=PlatformStatus)
    android: PlatformStatus = field(default_factory=PlatformStatus)
    huawei: PlatformStatus = field(default_factory=PlatformStatus)

    def to_dict(self) -> dict:
        return asdict(self)


class StateStorage:
    """Named push counters on top of a storage backend."""

    def __init__(self, store: Storage):
        self.store = store

    def init(self) -> None:
        self.store.init()

    def close(self) -> None:
        self.store.close()

    def reset(self) -> None:
        for key in (
            core.TOTAL_COUNT_KEY, core.IOS_SUCCESS_KEY, core.IOS_ERROR_KEY,
            core.ANDROID_SUCCESS_KEY, core.ANDROID_ERROR_KEY,
            core.HUAWEI_SUCCESS_KEY, core.HUAWEI_ERROR_KEY,
        ):
            self.store.set(key, 0)

    def add_total_count(self, count):
        self.store.add(core.TOTAL_COUNT_KEY, count)

    def add_ios_success(self, count):
        self.store.add(core.IOS_SUCCESS_KEY, count)

    def add_ios_error(self, count):
        self.store.add(core.IOS_ERROR_KEY, count)

    def add_android_success(self, count):
        self.store.add(core.ANDROID_SUCCESS_KEY, count)

    def add_android_error(self, count):
        self.store.add(core.ANDROID_ERROR_KEY, count)

    def add_huawei_success(self, count):
        self.store.add(core.HUAWEI_SUCCESS_KEY, count)

    def add_huawei_error(self, count):
        self.store.add(core.HUAWEI_ERROR_KEY, count)

    def get_total_count(self):
        return self.store.get(core.TOTAL_COUNT_KEY)

    def get_ios_success(self):
        return self.store.get(core.IOS_SUCCESS_KEY)

    def get_ios_error(self):
        return self.store.get(core.IOS_ERROR_KEY)

    def get_android_success(self):
        return self.store.get(core.ANDROID_SUCCESS_KEY)

    def get_android_error(self):
        return self.store.get(core.ANDROID_ERROR_KEY)

    def get_huawei_success(self):
        return self.store.get(core.HUAWEI_SUCCESS_KEY)

    def get_huawei_error(self):
        return self.store.get(core.HUAWEI_ERROR_KEY)


def create_storage(engine: str, **kwargs) -> Storage:
    """Build the storage backend named by engine.

    Accepted keyword arguments: path (file engines), bucket (boltdb),
    addr, username, password, db, cluster (redis).
    """
    path = kwargs.get("path", "")
    if engine == "memory":
        from pushrelay.storage.memory import MemoryStorage
        return MemoryStorage()
    if engine == "redis":
        from pushrelay.storage.redis_store import RedisStorage
        return RedisStorage(
            kwargs.get("addr", "localhost:6379"),
            kwargs.get("username", ""),
            kwargs.get("password", ""),
            kwargs.get("db", 0),
            kwargs.get("cluster", False),
        )
    if engine == "boltdb":
        from pushrelay.storage.boltdb import BoltDBStorage
        return BoltDBStorage(path, kwargs.get("bucket", "gorush"))
    if engine == "buntdb":
        from pushrelay.storage.buntdb import BuntDBStorage
        return BuntDBStorage(path)
    if engine == "leveldb":
        from pushrelay.storage.leveldb import LevelDBStorage
        return LevelDBStorage(path)
    if engine == "badger":
        from pushrelay.storage.badger import BadgerStorage
        return BadgerStorage(path)
    logx.log_error.error("storage error: can't find storage driver")
    raise ValueError("can't find storage driver")


def init_app_status(engine: str, **kwargs) -> StateStorage:
    """Create and open the global counter storage and return it."""
    global stat_storage
    logx.log_access.info("Init App Status Engine as %s", engine)
    storage = StateStorage(create_storage(engine, **kwargs))
    try:
        storage.init()
    except Exception as exc:
        logx.log_error.error("storage error: %s", exc)
        raise
    stat_storage = storage
    return storage