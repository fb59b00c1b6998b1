import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

import httpx
import phonenumbers
import pytest

from dinglive.comm.transport import API_KEY_HEADER
from dinglive.config import ClientConfig

TEST_API_KEY = "valid_api_key"
TEST_INVALID_API_KEY = "invalid_api_key"
TEST_BASE_URL = "https://api.test.ding.live/v1"

TEST_PHONE_NUMBER = phonenumbers.format_number(
    phonenumbers.example_number("US"), phonenumbers.PhoneNumberFormat.E164
)


def rfc3339(dt: datetime) -> str:
    """Formats a UTC datetime the way the API does ("Z" suffix)."""
    return dt.isoformat().replace("+00:00", "Z")


@dataclass
class RecordingHandler:
    """
    MockTransport handler emulating the API gateway and a backend.

    Requests carrying another API key than `TEST_API_KEY` get the gateway 403.
    Otherwise the queued `(status, body)` replies are served in order, the last
    one being repeated.
    """

    replies: List[tuple]
    requests: List[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get(API_KEY_HEADER) != TEST_API_KEY:
            return httpx.Response(403, json={"message": "Forbidden"})

        idx = min(len(self.requests) - 1, len(self.replies) - 1)
        status, body = self.replies[idx]
        if isinstance(body, Exception):
            raise body
        return httpx.Response(
            status, content=body, headers={"content-type": "application/json"}
        )

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_body(self, idx: int = -1) -> dict:
        return json.loads(self.requests[idx].content)


def mock_server(raw_response: str, status: int = 200) -> RecordingHandler:
    """Handler always answering `raw_response` with `status`."""
    return RecordingHandler(replies=[(status, raw_response)])


def unreachable_server(request: httpx.Request) -> httpx.Response:
    """Handler for tests in which no request may be sent."""
    pytest.fail(f"unexpected request to {request.url}")


def make_config(
    handler: Optional[Callable] = None,
    api_key: str = TEST_API_KEY,
    customer_uuid: Optional[str] = None,
    **kwargs,
) -> ClientConfig:
    """Builds a config routing the sync client to a mock handler."""
    transport = httpx.MockTransport(handler or unreachable_server)
    kwargs.setdefault("retry_wait_min", 0.001)
    kwargs.setdefault("retry_wait_max", 0.01)
    kwargs.setdefault("base_url", TEST_BASE_URL)
    return ClientConfig(
        customer_uuid=customer_uuid or str(uuid.uuid4()),
        api_key=api_key,
        http_client=httpx.Client(transport=transport),
        **kwargs,
    )


def make_async_config(
    handler: Optional[Callable] = None,
    api_key: str = TEST_API_KEY,
    **kwargs,
) -> ClientConfig:
    """Builds a config routing the async client to a mock handler."""
    transport = httpx.MockTransport(handler or unreachable_server)
    kwargs.setdefault("retry_wait_min", 0.001)
    kwargs.setdefault("retry_wait_max", 0.01)
    kwargs.setdefault("base_url", TEST_BASE_URL)
    return ClientConfig(
        customer_uuid=str(uuid.uuid4()),
        api_key=api_key,
        async_http_client=httpx.AsyncClient(transport=transport),
        **kwargs,
    )


class RecordingLogger:
    """LeveledLogger keeping every message, per level."""

    def __init__(self):
        self.records: List[tuple] = []

    def debug(self, msg, *args, **kwargs):
        self.records.append(("debug", msg))

    def info(self, msg, *args, **kwargs):
        self.records.append(("info", msg))

    def warning(self, msg, *args, **kwargs):
        self.records.append(("warning", msg))

    def error(self, msg, *args, **kwargs):
        self.records.append(("error", msg))

    def messages(self, level: str) -> List[str]:
        return [m for lvl, m in self.records if lvl == level]
