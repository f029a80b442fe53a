"""Building Firebase Cloud Messaging messages from push requests."""

from __future__ import annotations

import json
from typing import Any, Optional

from pushrelay.notify.notification import PushNotification


def _encode_value(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError):
        return None


def _message(**parts) -> dict:
    return {key: value for key, value in parts.items() if value is not None and value != ""}


def _apply_sound(req: PushNotification, sound: str) -> None:
    if req.apns is None:
        req.apns = {"payload": {"aps": {"sound": sound}}}
    elif req.apns.get("payload") is None:
        req.apns["payload"] = {"aps": {"sound": sound}}
    elif req.apns["payload"].get("aps") is None:
        req.apns["payload"]["aps"] = {"sound": sound}
    else:
        req.apns["payload"]["aps"]["sound"] = sound

    if req.android is None:
        req.android = {"priority": req.priority, "notification": {"sound": sound}}


def get_android_notification(req: PushNotification) -> list:
    """Return one message per token, preceded by a topic message if any.

    The request's notification, APNs and Android sections are filled in place,
    and every message shares them.
    """
    if req.title or req.message or req.image:
        if req.notification is None:
            req.notification = {}
        if req.title:
            req.notification["title"] = req.title
        if req.message:
            req.notification["body"] = req.message
        if req.image:
            req.notification["image"] = req.image
        if req.mutable_content:
            req.apns = {"payload": {"aps": {"mutable_content": True}}}

    # Background notifications carry no alert, badge or sound.
    if req.content_available:
        req.apns = {
            "headers": {"apns-priority": "5"},
            "payload": {"aps": {"content_available": True, "custom_data": req.data}},
        }

    if isinstance(req.sound, str):
        _apply_sound(req, req.sound)

    data = None
    if req.data:
        data = {}
        for key, value in req.data.items():
            encoded = _encode_value(value)
            if encoded is not None:
                data[key] = encoded

    shared = {
        "notification": req.notification,
        "android": req.android,
        "webpush": req.webpush,
        "apns": req.apns,
        "fcm_options": req.fcm_options,
        "data": data,
    }

    messages = []
    if req.is_topic():
        messages.append(_message(topic=req.topic, condition=req.condition, **shared))
    messages.extend(_message(token=token, **shared) for token in req.tokens)
    return messages