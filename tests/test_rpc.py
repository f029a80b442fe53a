import pytest

from pushrelay.core import Platform
from pushrelay.rpc import (
    INT32_MAX,
    INT32_MIN,
    HealthService,
    ServingStatus,
    UnknownServiceError,
    request_to_notification,
    safe_int_to_int32,
)


@pytest.mark.parametrize(
    "value",
    [123, 2147483647, -2147483648],
    ids=["Valid int32", "Max int32", "Min int32"],
)
def test_safe_int_to_int32_valid(value):
    assert safe_int_to_int32(value) == value


@pytest.mark.parametrize(
    "value",
    [2147483647 + 1, -2147483648 - 1],
    ids=["Overflow int32", "Underflow int32"],
)
def test_safe_int_to_int32_out_of_range(value):
    with pytest.raises(OverflowError, match="integer overflow: value out of int32 range"):
        safe_int_to_int32(value)


def test_int32_bounds():
    assert safe_int_to_int32(INT32_MAX) == 2147483647
    assert safe_int_to_int32(INT32_MIN) == -2147483648


def test_health_overall_is_serving():
    assert HealthService().check("") is ServingStatus.SERVING


def test_health_unknown_service():
    with pytest.raises(UnknownServiceError, match="unknown service"):
        HealthService().check("push")


def test_health_set_status():
    service = HealthService()
    service.set_serving_status("push", ServingStatus.NOT_SERVING)
    assert service.check("push") is ServingStatus.NOT_SERVING


def test_request_to_notification_fields():
    request = {
        "platform": 2,
        "tokens": ["1234567890"],
        "message": "test message",
        "badge": 1,
        "category": "test",
        "sound": "test",
        "priority": "HIGH",
        "alert": {
            "title": "Test Title",
            "body": "Test Alert Body",
            "subtitle": "Test Alert Sub Title",
            "loc_key": "Test loc key",
            "loc_args": ["test", "test"],
        },
        "data": {"key1": "welcome", "key2": 2},
    }
    notification = request_to_notification(request)
    assert notification.platform == Platform.ANDROID
    assert notification.tokens == ["1234567890"]
    assert notification.message == "test message"
    assert notification.badge == 1
    assert notification.category == "test"
    assert notification.sound == "test"
    assert notification.priority == "high"
    assert notification.alert.title == "Test Title"
    assert notification.alert.body == "Test Alert Body"
    assert notification.alert.subtitle == "Test Alert Sub Title"
    assert notification.alert.loc_key == "Test loc key"
    assert notification.alert.loc_args == ["test", "test"]
    assert notification.data == {"key1": "welcome", "key2": 2}


def test_request_zero_badge_is_not_set():
    assert request_to_notification({"tokens": ["a"], "badge": 0}).badge is None


def test_request_alert_action_fills_action_loc_key():
    notification = request_to_notification({"alert": {"action": "open"}})
    assert notification.alert.action == "open"
    assert notification.alert.action_loc_key == "open"


def test_request_without_data_keeps_empty_data():
    notification = request_to_notification({"tokens": ["a", "b"]})
    assert notification.data == {}
    assert safe_int_to_int32(len(notification.tokens)) == 2