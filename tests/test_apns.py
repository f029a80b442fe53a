import json

from pushrelay.core import Platform
from pushrelay.notify.apns import ApnsNotification, Sound, get_ios_notification
from pushrelay.notify.notification import (
    APNS_PRIORITY_HIGH,
    APNS_PRIORITY_LOW,
    Alert,
    PushNotification,
)


def _req(**kwargs):
    kwargs.setdefault("platform", Platform.IOS)
    kwargs.setdefault("tokens", ["token"])
    return PushNotification(**kwargs)


def test_message_without_title_is_plain_alert():
    notification = get_ios_notification(_req(message="Welcome"))
    assert notification.to_dict()["aps"]["alert"] == "Welcome"


def test_title_and_message_build_alert_dictionary():
    notification = get_ios_notification(_req(message="Welcome", title="Hello"))
    alert = notification.to_dict()["aps"]["alert"]
    assert alert == {"title": "Hello", "body": "Welcome"}


def test_alert_fields_override_and_extend():
    req = _req(
        title="Hello",
        alert=Alert(title="Other", subtitle="Sub", body="Body", loc_key="key",
                    loc_args=["a", "b"], action="open"),
    )
    alert = get_ios_notification(req).to_dict()["aps"]["alert"]
    assert alert["title"] == "Other"
    assert alert["subtitle"] == "Sub"
    assert alert["body"] == "Body"
    assert alert["loc-key"] == "key"
    assert alert["loc-args"] == ["a", "b"]
    assert alert["action"] == "open"


def test_zero_badge_is_kept_and_negative_dropped():
    assert get_ios_notification(_req(badge=0)).to_dict()["aps"]["badge"] == 0
    assert "badge" not in get_ios_notification(_req(badge=-1)).to_dict()["aps"]


def test_flags_set_integer_markers():
    aps = get_ios_notification(_req(mutable_content=True, content_available=True)).to_dict()["aps"]
    assert aps["mutable-content"] == aps["content-available"] == 1


def test_string_sound():
    aps = get_ios_notification(_req(sound="bingbong.aiff")).to_dict()["aps"]
    assert aps["sound"] == "bingbong.aiff"


def test_mapping_sound_decodes_case_insensitively():
    req = _req(sound={"Critical": 1, "name": "alarm.aiff", "Volume": 0.5})
    aps = get_ios_notification(req).to_dict()["aps"]
    assert aps["sound"] == {"critical": 1, "name": "alarm.aiff", "volume": 0.5}


def test_sound_object():
    req = _req(sound=Sound(name="ding.aiff"))
    assert get_ios_notification(req).to_dict()["aps"]["sound"] == {"name": "ding.aiff"}


def test_sound_name_replaces_request_sound():
    req = _req(sound="bingbong.aiff", sound_name="ding.aiff", sound_volume=0.25)
    aps = get_ios_notification(req).to_dict()["aps"]
    assert aps["sound"] == {"name": "ding.aiff", "volume": 0.25}


def test_data_becomes_custom_keys():
    req = _req(message="Welcome", data={"key1": "welcome", "key2": 2})
    payload = get_ios_notification(req).to_dict()
    assert payload["key1"] == "welcome"
    assert payload["key2"] == 2
    assert payload["aps"]["alert"] == "Welcome"


def test_priority_mapping():
    assert get_ios_notification(_req(priority="normal")).priority == APNS_PRIORITY_LOW
    assert get_ios_notification(_req(priority="high")).priority == APNS_PRIORITY_HIGH
    assert get_ios_notification(_req(priority="urgent")).priority == 0


def test_headers_carry_request_fields():
    req = _req(apns_id="id-1", topic="com.example.app", collapse_id="c1",
               expiration=1700000000, priority="high", push_type="background")
    headers = get_ios_notification(req).headers()
    assert headers["apns-id"] == "id-1"
    assert headers["apns-topic"] == "com.example.app"
    assert headers["apns-collapse-id"] == "c1"
    assert headers["apns-expiration"] == "1700000000"
    assert headers["apns-priority"] == str(APNS_PRIORITY_HIGH)
    assert headers["apns-push-type"] == "background"


def test_default_push_type_header():
    headers = ApnsNotification().headers()
    assert headers == {"apns-push-type": "alert"}


def test_live_activity_fields():
    req = _req(content_state={"score": 3}, stale_date=100, dismissal_date=200,
               event="update", timestamp=50, interruption_level="passive",
               category="game", thread_id="t1", url_args=["x"])
    aps = get_ios_notification(req).to_dict()["aps"]
    assert aps["content-state"] == {"score": 3}
    assert aps["stale-date"] == 100
    assert aps["dismissal-date"] == 200
    assert aps["event"] == "update"
    assert aps["timestamp"] == 50
    assert aps["interruption-level"] == "passive"
    assert aps["category"] == "game"
    assert aps["thread-id"] == "t1"
    assert aps["url-args"] == ["x"]


def test_payload_is_json_round_trippable():
    req = _req(title="Hello", message="Welcome", badge=2, sound={"name": "a.aiff"},
               data={"nested": {"a": [1, 2]}})
    payload = get_ios_notification(req).to_dict()
    assert json.loads(json.dumps(payload)) == payload


def test_to_dict_returns_independent_copy():
    notification = get_ios_notification(_req(data={"nested": {"a": 1}}))
    copy_one = notification.to_dict()
    copy_one["nested"]["a"] = 99
    assert notification.to_dict()["nested"]["a"] == 1