"""Building Apple Push Notification service requests from push requests."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from pushrelay.notify.notification import (
    APNS_PRIORITY_HIGH,
    APNS_PRIORITY_LOW,
    Alert,
    PushNotification,
)

DEFAULT_PUSH_TYPE = "alert"


@dataclass
class Sound:
    """The aps sound dictionary, used for critical alerts."""

    critical: int = 0
    name: str = ""
    volume: float = 0.0

    def to_dict(self) -> dict:
        data: dict = {}
        if self.critical:
            data["critical"] = self.critical
        if self.name:
            data["name"] = self.name
        if self.volume:
            data["volume"] = self.volume
        return data

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Sound":
        """Build a sound from a mapping; keys match field names in any case.

        Values of the wrong type are skipped.
        """
        sound = cls()
        for key, value in data.items():
            name = str(key).lower()
            if isinstance(value, bool):
                continue
            if name == "critical" and isinstance(value, (int, float)):
                sound.critical = int(value)
            elif name == "name" and isinstance(value, str):
                sound.name = value
            elif name == "volume" and isinstance(value, (int, float)):
                sound.volume = float(value)
        return sound


class _BuilderSound(Sound):
    """Sound dictionary created by setting a sound name or volume."""


class _Payload:
    """The aps dictionary plus custom top-level keys."""

    def __init__(self) -> None:
        self.aps: dict = {}
        self.custom: dict = {}

    def alert(self) -> Alert:
        current = self.aps.get("alert")
        if not isinstance(current, Alert):
            current = Alert()
            self.aps["alert"] = current
        return current

    def sound(self) -> Sound:
        current = self.aps.get("sound")
        if not isinstance(current, _BuilderSound):
            current = _BuilderSound()
            self.aps["sound"] = current
        return current

    def to_dict(self) -> dict:
        aps = {}
        for key, value in self.aps.items():
            if isinstance(value, (Alert, Sound)):
                value = value.to_dict()
            aps[key] = copy.deepcopy(value)
        result = copy.deepcopy(self.custom)
        result["aps"] = aps
        return result


@dataclass
class ApnsNotification:
    """One APNs request: its header values and JSON payload."""

    device_token: str = ""
    apns_id: str = ""
    topic: str = ""
    collapse_id: str = ""
    expiration: Optional[int] = None
    priority: int = 0
    push_type: str = ""
    payload: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Return the JSON body sent to APNs."""
        return copy.deepcopy(self.payload)

    def headers(self) -> dict:
        """Return the apns-* request headers."""
        result = {}
        if self.apns_id:
            result["apns-id"] = self.apns_id
        if self.collapse_id:
            result["apns-collapse-id"] = self.collapse_id
        if self.priority > 0:
            result["apns-priority"] = str(self.priority)
        if self.topic:
            result["apns-topic"] = self.topic
        if self.expiration is not None:
            result["apns-expiration"] = str(self.expiration)
        result["apns-push-type"] = self.push_type or DEFAULT_PUSH_TYPE
        return result


def _alert_dictionary(payload: _Payload, req: PushNotification) -> None:
    alert = req.alert
    if req.title:
        payload.alert().title = req.title
    if req.interruption_level:
        payload.aps["interruption-level"] = req.interruption_level
    if req.message and req.title:
        payload.alert().body = req.message
    if alert.title:
        payload.alert().title = alert.title
    # Apple Watch and Safari show the subtitle as part of the notification.
    if alert.subtitle:
        payload.alert().subtitle = alert.subtitle
    if alert.title_loc_key:
        payload.alert().title_loc_key = alert.title_loc_key
    if alert.loc_args:
        payload.alert().loc_args = list(alert.loc_args)
    if alert.title_loc_args:
        payload.alert().title_loc_args = list(alert.title_loc_args)
    if alert.body:
        payload.alert().body = alert.body
    if alert.launch_image:
        payload.alert().launch_image = alert.launch_image
    if alert.loc_key:
        payload.alert().loc_key = alert.loc_key
    if alert.action:
        payload.alert().action = alert.action
    if alert.action_loc_key:
        payload.alert().action_loc_key = alert.action_loc_key
    if req.category:
        payload.aps["category"] = req.category
    if alert.summary_arg:
        payload.alert().summary_arg = alert.summary_arg
    if alert.summary_arg_count > 0:
        payload.alert().summary_arg_count = alert.summary_arg_count
    if req.content_state:
        payload.aps["content-state"] = req.content_state
    if req.stale_date > 0:
        payload.aps["stale-date"] = req.stale_date
    if req.dismissal_date > 0:
        payload.aps["dismissal-date"] = req.dismissal_date
    if req.event:
        payload.aps["event"] = req.event
    if req.timestamp > 0:
        payload.aps["timestamp"] = req.timestamp


def _request_sound(sound: Any) -> Any:
    if isinstance(sound, Mapping):
        return Sound.from_mapping(sound)
    if isinstance(sound, (str, Sound)):
        return sound
    return None


def get_ios_notification(req: PushNotification) -> ApnsNotification:
    """Build the APNs request for a push request."""
    notification = ApnsNotification(
        apns_id=req.apns_id,
        topic=req.topic,
        collapse_id=req.collapse_id,
        expiration=req.expiration,
    )

    if req.priority == "normal":
        notification.priority = APNS_PRIORITY_LOW
    elif req.priority == "high":
        notification.priority = APNS_PRIORITY_HIGH

    if req.push_type:
        notification.push_type = req.push_type

    payload = _Payload()

    if req.message and not req.title:
        payload.aps["alert"] = req.message

    # A zero badge clears the badge on the app icon.
    if req.badge is not None and req.badge >= 0:
        payload.aps["badge"] = req.badge

    if req.mutable_content:
        payload.aps["mutable-content"] = 1

    sound = _request_sound(req.sound)
    if sound is not None:
        payload.aps["sound"] = sound

    if req.sound_name:
        payload.sound().name = req.sound_name

    if req.sound_volume > 0:
        payload.sound().volume = req.sound_volume

    if req.content_available:
        payload.aps["content-available"] = 1

    if req.url_args:
        payload.aps["url-args"] = list(req.url_args)

    if req.thread_id:
        payload.aps["thread-id"] = req.thread_id

    for key, value in req.data.items():
        payload.custom[key] = value

    _alert_dictionary(payload, req)

    notification.payload = payload.to_dict()
    return notification