"""RPC service logic: health checks and notification requests."""

from __future__ import annotations

import enum
import threading
from collections.abc import Mapping

from pushrelay.notify.notification import Alert, PushNotification

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class ServingStatus(enum.IntEnum):
    """Serving status reported by a health check."""

    UNKNOWN = 0
    SERVING = 1
    NOT_SERVING = 2


class UnknownServiceError(LookupError):
    """Raised when a health check names a service that is not monitored."""


class HealthService:
    """Tracks the serving status of the monitored services."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._status: dict[str, ServingStatus] = {}

    def check(self, service: str = "") -> ServingStatus:
        """Return the status of a service; the empty name means the server."""
        with self._lock:
            if service == "":
                return ServingStatus.SERVING
            try:
                return self._status[service]
            except KeyError:
                raise UnknownServiceError("unknown service") from None

    def set_serving_status(self, service: str, status: ServingStatus) -> None:
        """Record the serving status of a service."""
        with self._lock:
            self._status[service] = ServingStatus(status)


def safe_int_to_int32(n: int) -> int:
    """Return n if it fits in a signed 32-bit integer; raise OverflowError otherwise."""
    if n < INT32_MIN or n > INT32_MAX:
        raise OverflowError("integer overflow: value out of int32 range")
    return n


def request_to_notification(request: Mapping) -> PushNotification:
    """Build a push notification from an RPC notification request mapping."""
    notification = PushNotification(
        id=request.get("id", ""),
        platform=int(request.get("platform", 0)),
        tokens=list(request.get("tokens") or []),
        message=request.get("message", ""),
        title=request.get("title", ""),
        topic=request.get("topic", ""),
        category=request.get("category", ""),
        sound=request.get("sound", ""),
        content_available=bool(request.get("content_available", False)),
        thread_id=request.get("thread_id", ""),
        mutable_content=bool(request.get("mutable_content", False)),
        image=request.get("image", ""),
        priority=str(request.get("priority", "")).lower(),
        push_type=request.get("push_type", ""),
        development=bool(request.get("development", False)),
    )

    badge = int(request.get("badge", 0))
    if badge > 0:
        notification.badge = badge

    alert = request.get("alert")
    if alert is not None:
        notification.alert = Alert(
            title=alert.get("title", ""),
            body=alert.get("body", ""),
            subtitle=alert.get("subtitle", ""),
            action=alert.get("action", ""),
            action_loc_key=alert.get("action", ""),
            launch_image=alert.get("launch_image", ""),
            loc_args=list(alert.get("loc_args") or []),
            loc_key=alert.get("loc_key", ""),
            title_loc_args=list(alert.get("title_loc_args") or []),
            title_loc_key=alert.get("title_loc_key", ""),
        )

    data = request.get("data")
    if data is not None:
        notification.data = dict(data)

    return notification