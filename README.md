# pushrelay

`pushrelay` is a library of building blocks for relaying push notifications to iOS (APNs), Android (FCM) and Huawei devices. It contains:

- **Notification requests.** `pushrelay.notify.notification.PushNotification` holds a request. It converts to and from JSON, and `check_message` validates it.
- **Payload builders.**
  - `pushrelay.notify.fcm.get_android_notification` builds FCM message dictionaries.
  - `pushrelay.notify.apns.get_ios_notification` builds an `ApnsNotification` with headers and a JSON body.
- **Delivery feedback.** `pushrelay.notify.feedback.dispatch_feedback` POSTs a push log entry as JSON to a URL.
- **Push logging.** `pushrelay.logx` sets up the access and error loggers, records push results in text or JSON form, and can mask device tokens.
- **Statistics.** `pushrelay.status` keeps per-platform success and error counters on a storage backend you choose.
- **RPC service logic.** `pushrelay.rpc` has a health-check service and turns RPC request mappings into notifications.
- **PID files.** `pushrelay.pidfile.create_pid_file` writes the current process id to a file.

## Platforms

`pushrelay.core.Platform` numbers the platforms:

| Value | Member             |
|-------|--------------------|
| 1     | `Platform.IOS`     |
| 2     | `Platform.ANDROID` |
| 3     | `Platform.HUAWEI`  |

`pushrelay.core.QueueEngine` names the queue backends: `local`, `nsq`, `nats` and `redis`. `is_local_queue` tells whether a value is `local`.

## Building and checking a request

```python
from pushrelay.notify.notification import PushNotification, check_message

req = PushNotification.from_dict({
    "tokens": ["token_a", "token_b"],
    "platform": 2,
    "message": "Hello World Android!",
})
check_message(req)
print(req.to_json())
```

`check_message` first appends `to`, if it is set, to the token list. It raises `ValueError` in three cases:

- There are no tokens and the request is not a topic or condition message.
- An iOS request has exactly one token and that token is empty.
- An Android or Huawei request has more than 500 tokens.

`set_proxy` records an outgoing proxy URL. It raises `ValueError` when the value is not a request URI.

`log_push` and `make_error_logs` log push results according to a `LogOptions`.

## Platform payloads

```python
from pushrelay.notify.fcm import get_android_notification
from pushrelay.notify.apns import get_ios_notification

messages = get_android_notification(req)  # a topic message first, if any, then one per token

ios_req = PushNotification(platform=1, tokens=["token"], title="Hi", message="Hello", badge=1)
apns = get_ios_notification(ios_req)
apns.headers()   # apns-* header values
apns.to_dict()   # the JSON body, {"aps": {...}, ...custom data}
```

`get_android_notification` writes the notification, APNs and Android sections into the request in place. It encodes data values that are not strings as JSON strings.

## Statistics

```python
from pushrelay.status import StateStorage, create_storage

stats = StateStorage(create_storage("memory"))
stats.init()
stats.add_android_success(3)
stats.add_total_count(3)
print(stats.get_android_success(), stats.get_total_count())
stats.reset()
stats.close()
```

`create_storage` accepts these engine names. Any other name raises `ValueError`.

| Engine    | Class              | Where the counters are kept |
|-----------|--------------------|-----------------------------|
| `memory`  | `MemoryStorage`    | A dictionary in memory |
| `redis`   | `RedisStorage`     | Redis, one node or a cluster |
| `boltdb`  | `BoltDBStorage`    | A table named by `bucket` in an SQLite file |
| `buntdb`  | `BuntDBStorage`    | An append-only file of JSON lines |
| `leveldb` | `LevelDBStorage`   | A `dbm` database |
| `badger`  | `BadgerStorage`    | A `dbm` database inside its own directory |

`create_storage` takes these keyword arguments:

- `path`, for the file engines. When it is empty, the temporary directory is used.
- `bucket`, for `boltdb`.
- `addr`, `username`, `password`, `db` and `cluster`, for `redis`.

`init_app_status` does three things: it creates the storage, opens it, and stores it as `pushrelay.status.stat_storage`.

`AppStatus` and `PlatformStatus` describe a snapshot of the counters.

## Feedback

```python
from pushrelay.logx import LogPushEntry
from pushrelay.notify.feedback import dispatch_feedback

entry = LogPushEntry(type="succeeded-push", platform="android", token="token")
dispatch_feedback(entry, "http://localhost:8080/dispatch", 10, ["x-relay-token: token"])
```

Headers are given as `name:value` strings. `dispatch_feedback` raises `FeedbackError` in these cases:

- The URL is empty.
- The timeout is not positive.
- The request fails in transport.
- The response status is not 200.

## Logging

- `init_log(access_level, access_log, error_level, error_log)` configures the two loggers. A log target is `stdout`, `stderr` or a file path.
- `hide_token` masks the first and last characters of a token.
- `log_push` logs an `InputLog` and returns the `LogPushEntry` it recorded.
- `queue_logger()` returns a `QueueLogger` bound to the access and error loggers.

## RPC helpers

- `HealthService.check("")` always reports `ServingStatus.SERVING`.
- For a named service, `check` returns the status set with `set_serving_status`. A name that was never set raises `UnknownServiceError`.
- `request_to_notification` builds a `PushNotification` from a request mapping.
- `safe_int_to_int32` raises `OverflowError` outside the signed 32-bit range.

## What this package does not do

This package does not deliver notifications:

- It has no APNs, FCM or Huawei client. It builds the payloads, and sending them is up to the caller.
- It has no HTTP or gRPC server.
- It has no worker queue.
- It does not load configuration files.
- It provides no command-line program.

`pushrelay.core.Health` is an abstract interface only. The package has no health-check client that implements it.

## Tests

The `test` extra installs the libraries the test suite uses, `pytest` and `respx`.