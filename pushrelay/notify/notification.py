"""Push notification requests, validation and push logging helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from pushrelay import logx
from pushrelay.core import Platform
from pushrelay.logx import InputLog, LogPushEntry

APNS_PRIORITY_LOW = 5
APNS_PRIORITY_HIGH = 10

HIGH = "high"
NORMAL = "nornal"

MAX_TOKENS_PER_REQUEST = 500

proxy_url: Optional[str] = None


def _field(json_name: Optional[str], default: Any = None, *, factory=None,
           omitempty: bool = True, pointer: bool = False):
    """Declare a field; a json_name of None means the attribute name is used."""
    metadata = {"json": json_name, "omitempty": omitempty, "pointer": pointer}
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _json_name(f) -> str:
    return f.metadata["json"] or f.name


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and value == 0:
        return True
    if isinstance(value, (str, list, tuple, dict)) and len(value) == 0:
        return True
    return False


def _to_dict(obj) -> dict:
    result = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        meta = f.metadata
        if meta["pointer"]:
            if value is None:
                continue
        elif meta["omitempty"] and _is_empty(value):
            continue
        if isinstance(value, Alert):
            value = value.to_dict()
        result[_json_name(f)] = value
    return result


def _from_dict(cls, data: dict) -> dict:
    by_json = {_json_name(f): f for f in fields(cls)}
    kwargs = {}
    for key, value in data.items():
        f = by_json.get(key)
        if f is not None:
            kwargs[f.name] = value
    return kwargs


@dataclass
class Alert:
    """APNs alert dictionary."""

    action: str = _field("action", "")
    action_loc_key: str = _field("action-loc-key", "")
    body: str = _field("body", "")
    launch_image: str = _field("launch-image", "")
    loc_args: list = _field("loc-args", factory=list)
    loc_key: str = _field("loc-key", "")
    title: str = _field("title", "")
    subtitle: str = _field("subtitle", "")
    title_loc_args: list = _field("title-loc-args", factory=list)
    title_loc_key: str = _field("title-loc-key", "")
    summary_arg: str = _field("summary-arg", "")
    summary_arg_count: int = _field("summary-arg-count", 0)

    def to_dict(self) -> dict:
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Alert":
        return cls(**_from_dict(cls, data or {}))


@dataclass
class PushNotification:
    """A single notification request for one platform."""

    # Common
    id: str = _field("notif_id", "")
    to: str = _field("to", "")
    topic: str = _field("topic", "")
    tokens: list = _field("tokens", factory=list, omitempty=False)
    platform: int = _field("platform", 0, omitempty=False)
    message: str = _field("message", "")
    title: str = _field("title", "")
    image: str = _field("image", "")
    priority: str = _field("priority", "")
    content_available: bool = _field("content_available", False)
    mutable_content: bool = _field("mutable_content", False)
    sound: Any = _field("sound", None)
    data: dict = _field("data", factory=dict)
    retry: int = _field("retry", 0)

    # Android
    notification: Optional[dict] = _field("notification", None)
    android: Optional[dict] = _field("android", None)
    webpush: Optional[dict] = _field("webpush", None)
    apns: Optional[dict] = _field("apns", None)
    fcm_options: Optional[dict] = _field("fcm_options", None)
    condition: str = _field("condition", "")

    # Huawei
    app_id: str = _field("app_id", "")
    app_secret: str = _field(None, "")
    huawei_notification: Optional[dict] = _field("huawei_notification", None)
    huawei_data: str = _field("huawei_data", "")
    huawei_collapse_key: int = _field("huawei_collapse_key", 0)
    huawei_ttl: str = _field("huawei_ttl", "")
    bi_tag: str = _field("bi_tag", "")
    fast_app_target: int = _field("fast_app_target", 0)

    # iOS
    expiration: Optional[int] = _field("expiration", None, pointer=True)
    apns_id: str = _field("apns_id", "")
    collapse_id: str = _field("collapse_id", "")
    push_type: str = _field("push_type", "")
    badge: Optional[int] = _field("badge", None, pointer=True)
    category: str = _field("category", "")
    thread_id: str = _field("thread-id", "")
    url_args: list = _field("url-args", factory=list)
    alert: Alert = _field("alert", factory=Alert, omitempty=False)
    production: bool = _field("production", False)
    development: bool = _field("development", False)
    sound_name: str = _field("name", "")
    sound_volume: float = _field("volume", 0.0)
    interruption_level: str = _field("interruption_level", "")

    # Live activities
    content_state: dict = _field("content-state", factory=dict)
    stale_date: int = _field("stale-date", 0)
    dismissal_date: int = _field("dismissal-date", 0, omitempty=False)
    event: str = _field("event", "")
    timestamp: int = _field("timestamp", 0)

    def is_topic(self) -> bool:
        """Return whether this is an FCM or Huawei topic/condition message."""
        if self.platform in (Platform.HUAWEI, Platform.ANDROID):
            return bool(self.topic or self.condition)
        return False

    def to_dict(self) -> dict:
        return _to_dict(self)

    def to_json(self) -> str:
        """Serialise the request as the queue carries it."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> "PushNotification":
        """Build a request from its JSON form; unknown keys are ignored."""
        kwargs = _from_dict(cls, data)
        if "alert" in kwargs:
            kwargs["alert"] = Alert.from_dict(kwargs["alert"])
        if "tokens" in kwargs:
            kwargs["tokens"] = list(kwargs["tokens"] or [])
        for name in ("data", "content_state"):
            if name in kwargs and kwargs[name] is None:
                kwargs[name] = {}
        return cls(**kwargs)


@dataclass
class ResponsePush:
    """Logs collected while sending a notification."""

    logs: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"logs": [entry.to_dict() for entry in self.logs]}


@dataclass
class LogOptions:
    """How push results are logged."""

    hide_token: bool = False
    hide_messages: bool = False
    format: str = ""


def check_message(req: PushNotification) -> None:
    """Validate a request, folding `to` into the token list; raise ValueError."""
    if req.to:
        req.tokens.append(req.to)

    if not req.is_topic() and not req.tokens:
        raise ValueError("please provide at least one device token")

    if req.platform == Platform.IOS:
        if len(req.tokens) == 1 and req.tokens[0] == "":
            msg = "the device token cannot be empty"
            logx.log_access.debug(msg)
            raise ValueError(msg)
    elif req.platform in (Platform.ANDROID, Platform.HUAWEI):
        if len(req.tokens) > MAX_TOKENS_PER_REQUEST:
            msg = "you can specify up to 500 device registration tokens per invocation"
            logx.log_access.debug(msg)
            raise ValueError(msg)


def _split_scheme(raw: str) -> tuple[str, str]:
    for i, char in enumerate(raw):
        if char.isascii() and char.isalpha():
            continue
        if char.isascii() and (char.isdigit() or char in "+-."):
            if i == 0:
                return "", raw
            continue
        if char == ":":
            if i == 0:
                raise ValueError(f'parse "{raw}": missing protocol scheme')
            return raw[:i].lower(), raw[i + 1:]
        return "", raw
    return "", raw


def set_proxy(proxy: str) -> str:
    """Set the outgoing HTTP proxy; raise ValueError if it is not a request URI."""
    global proxy_url
    if proxy == "":
        raise ValueError('parse "": empty url')
    scheme, rest = _split_scheme(proxy)
    if not rest.startswith("/") and not scheme:
        raise ValueError(f'parse "{proxy}": invalid URI for request')
    proxy_url = proxy
    logx.log_access.debug("Set http proxy as " + proxy)
    return proxy


def log_push(options: LogOptions, status: str, token: str,
             req: PushNotification, error: Optional[BaseException]) -> LogPushEntry:
    """Log the result of one push and return its record."""
    return logx.log_push(
        InputLog(
            id=req.id,
            status=status,
            token=token,
            message=req.message,
            platform=req.platform,
            error=error,
            hide_token=options.hide_token,
            hide_message=options.hide_messages,
            format=options.format,
        )
    )


def make_error_logs(options: LogOptions, notification: PushNotification,
                    error: Optional[BaseException]) -> list:
    """Return a failure record for every token, or nothing without an error."""
    from pushrelay.core import FAILED_PUSH

    if error is None:
        return []
    return [
        log_push(options, FAILED_PUSH, token, notification, error)
        for token in notification.tokens
    ]