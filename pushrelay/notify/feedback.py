"""Posting push results to a feedback URL."""

from __future__ import annotations

import json
from typing import Iterable, Optional

import httpx

from pushrelay.logx import LogPushEntry


class FeedbackError(Exception):
    """Raised when a feedback entry cannot be delivered."""


def extract_headers(headers: Iterable[str]) -> dict:
    """Turn "name:value" strings into a dict, skipping malformed ones."""
    result = {}
    for header in headers:
        parts = header.split(":")
        if len(parts) == 2:
            result[parts[0]] = parts[1]
    return result


def dispatch_feedback(entry: LogPushEntry, url: str, timeout: float,
                      headers: Optional[Iterable[str]] = None) -> None:
    """POST a log entry as JSON to url; raise FeedbackError on failure."""
    if not url:
        raise FeedbackError("url can't be empty")
    if timeout <= 0:
        raise FeedbackError("context deadline exceeded")

    payload = json.dumps(entry.to_dict(), separators=(",", ":"), ensure_ascii=False)

    request_headers = {
        name: value.strip()
        for name, value in extract_headers(headers or []).items()
        if name.lower() != "content-type"
    }
    request_headers["Content-Type"] = "application/json; charset=utf-8"

    try:
        response = httpx.post(
            url,
            content=payload.encode("utf-8"),
            headers=request_headers,
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        raise FeedbackError(str(exc)) from exc

    if response.status_code != 200:
        raise FeedbackError("failed to send feedback")