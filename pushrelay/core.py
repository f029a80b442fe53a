"""Shared constants and interfaces: platforms, queue engines, storage and health."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod


class Platform(enum.IntEnum):
    """Target push platform."""

    IOS = 1
    ANDROID = 2
    HUAWEI = 3


SUCCEEDED_PUSH = "succeeded-push"
FAILED_PUSH = "failed-push"


class QueueEngine(str, enum.Enum):
    """Queue backends that carry notifications to workers."""

    LOCAL = "local"
    NSQ = "nsq"
    NATS = "nats"
    REDIS = "redis"


def is_local_queue(queue) -> bool:
    """Return True when the queue engine is the in-process queue."""
    return queue == QueueEngine.LOCAL


TOTAL_COUNT_KEY = "gorush-total-count"
IOS_SUCCESS_KEY = "gorush-ios-success-count"
IOS_ERROR_KEY = "gorush-ios-error-count"
ANDROID_SUCCESS_KEY = "gorush-android-success-count"
ANDROID_ERROR_KEY = "gorush-android-error-count"
HUAWEI_SUCCESS_KEY = "gorush-huawei-success-count"
HUAWEI_ERROR_KEY = "gorush-huawei-error-count"


class Storage(ABC):
    """A counter store keyed by name."""

    @abstractmethod
    def init(self) -> None:
        """Open the store; raise on failure."""

    @abstractmethod
    def add(self, key: str, count: int) -> None:
        """Add count to the counter stored under key."""

    @abstractmethod
    def set(self, key: str, count: int) -> None:
        """Store count under key."""

    @abstractmethod
    def get(self, key: str) -> int:
        """Return the counter under key, 0 when missing."""

    @abstractmethod
    def close(self) -> None:
        """Release the store."""


class Health(ABC):
    """A health-check connection."""

    @abstractmethod
    def check(self) -> bool:
        """Return whether the server is healthy; raise on a fatal error."""