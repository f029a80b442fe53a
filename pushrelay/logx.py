"""Access and error logging, including push result records."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from pushrelay.core import FAILED_PUSH, SUCCEEDED_PUSH, Platform

_GREEN = "\x1b[97;42m"
_YELLOW = "\x1b[97;43m"
_RED = "\x1b[97;41m"
_BLUE = "\x1b[97;44m"
_RESET = "\x1b[0m"

_IS_TERM = sys.stdout.isatty()

_LEVELS = {
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "level": record.levelname.lower(),
                "msg": record.getMessage(),
                "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            }
        )


def _text_formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(levelname)s[%(asctime)s] %(message)s", datefmt="%Y/%m/%d - %H:%M:%S"
    )


def _new_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_text_formatter())
        logger.addHandler(handler)
    return logger


log_access = _new_logger("pushrelay.access")
log_error = _new_logger("pushrelay.error")


@dataclass
class LogPushEntry:
    """Result of one push, as logged and reported."""

    id: str = ""
    type: str = ""
    platform: str = ""
    token: str = ""
    message: str = ""
    error: str = ""

    def to_dict(self) -> dict:
        data = {}
        if self.id:
            data["notif_id"] = self.id
        data.update(
            type=self.type,
            platform=self.platform,
            token=self.token,
            message=self.message,
            error=self.error,
        )
        return data


@dataclass
class InputLog:
    """What is known about a push when it is logged."""

    id: str = ""
    status: str = ""
    token: str = ""
    message: str = ""
    platform: int = 0
    error: Optional[BaseException] = None
    hide_token: bool = False
    hide_message: bool = False
    format: str = ""


def set_log_level(logger: logging.Logger, level: str) -> None:
    """Set the logger level from a name such as info or debug."""
    try:
        logger.setLevel(_LEVELS[level.lower()])
    except KeyError:
        raise ValueError(f'not a valid logrus Level: "{level}"') from None


def set_log_out(logger: logging.Logger, out: str) -> None:
    """Send the logger to stdout, stderr or a file appended to."""
    formatter = next(
        (h.formatter for h in logger.handlers if h.formatter), _text_formatter()
    )
    if out == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    elif out == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    else:
        fd = os.open(out, os.O_RDWR | os.O_CREAT | os.O_APPEND, 0o600)
        handler = logging.StreamHandler(os.fdopen(fd, "a", encoding="utf-8"))
    handler.setFormatter(formatter)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)


def init_log(access_level: str, access_log: str, error_level: str, error_log: str) -> None:
    """Configure the access and error loggers."""
    for logger in (log_access, log_error):
        formatter = _text_formatter() if _IS_TERM else _JSONFormatter()
        for handler in logger.handlers:
            handler.setFormatter(formatter)
    steps = (
        ("Set access log level error: ", set_log_level, log_access, access_level),
        ("Set error log level error: ", set_log_level, log_error, error_level),
        ("Set access log path error: ", set_log_out, log_access, access_log),
        ("Set error log path error: ", set_log_out, log_error, error_log),
    )
    for prefix, step, logger, value in steps:
        try:
            step(logger, value)
        except (ValueError, OSError) as exc:
            raise ValueError(prefix + str(exc)) from exc


def _color_for_platform(platform: int) -> str:
    return {Platform.IOS: _BLUE, Platform.ANDROID: _YELLOW, Platform.HUAWEI: _GREEN}.get(
        platform, _RESET
    )


def _type_for_platform(platform: int) -> str:
    return {Platform.IOS: "ios", Platform.ANDROID: "android", Platform.HUAWEI: "huawei"}.get(
        platform, ""
    )


def hide_token(token: str, mark_len: int) -> str:
    """Mask the first and last mark_len characters of a token."""
    if not token:
        return ""
    if len(token) < mark_len * 2:
        return "*" * len(token)
    start = token[len(token) - mark_len:]
    end = token[:mark_len]
    result = token.replace(start, "*" * mark_len)
    return result.replace(end, "*" * mark_len)


def get_log_push_entry(entry: InputLog) -> LogPushEntry:
    """Build the log record for a push."""
    return LogPushEntry(
        id=entry.id,
        type=entry.status,
        platform=_type_for_platform(entry.platform),
        token=hide_token(entry.token, 10) if entry.hide_token else entry.token,
        message="(message redacted)" if entry.hide_message else entry.message,
        error=str(entry.error) if entry.error is not None else "",
    )


def log_push(entry: InputLog) -> LogPushEntry:
    """Log a push result and return its record."""
    plat_color = _color_for_platform(entry.platform) if _IS_TERM else ""
    reset = _RESET if _IS_TERM else ""
    record = get_log_push_entry(entry)
    output = ""
    if entry.format == "json":
        output = json.dumps(record.to_dict(), separators=(",", ":"))
    elif entry.status == SUCCEEDED_PUSH:
        type_color = _GREEN if _IS_TERM else ""
        output = (
            f"|{type_color} {record.type} {reset}| {plat_color}{record.platform}{reset}"
            f" [{record.token}] {record.message}"
        )
    elif entry.status == FAILED_PUSH:
        type_color = _RED if _IS_TERM else ""
        output = (
            f"|{type_color} {record.type} {reset}| {plat_color}{record.platform}{reset}"
            f" [{record.token}] | {record.message} | Error Message: {record.error}"
        )
    if entry.status == SUCCEEDED_PUSH:
        log_access.info(output)
    elif entry.status == FAILED_PUSH:
        log_error.error(output)
    return record


def _fmt(fmt: str, args: tuple) -> str:
    return fmt % args if args else fmt


class QueueLogger:
    """Logger handed to queue workers, writing to the access and error logs."""

    def __init__(self, access: logging.Logger, error: logging.Logger):
        self.access = access
        self.error_logger = error

    def infof(self, fmt, *args):
        self.access.info(_fmt(fmt, args))

    def errorf(self, fmt, *args):
        self.error_logger.info(_fmt(fmt, args))

    def fatalf(self, fmt, *args):
        self.error_logger.critical(_fmt(fmt, args))
        raise SystemExit(1)

    def info(self, *args):
        self.access.info("".join(str(a) for a in args))

    def error(self, *args):
        self.error_logger.info("".join(str(a) for a in args))

    def fatal(self, *args):
        self.error_logger.info("".join(str(a) for a in args))


def queue_logger() -> QueueLogger:
    """Return a queue logger bound to the module loggers."""
    return QueueLogger(log_access, log_error)