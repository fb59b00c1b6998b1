import uuid
from datetime import datetime, timedelta, timezone

import pytest

from testing.unit.helpers import rfc3339


@pytest.fixture(scope="function")
def auth_uuid() -> str:
    return str(uuid.uuid4())


@pytest.fixture(scope="function")
def auth_success_body(auth_uuid):
    """A well-formed `authentication` success body, with its expected values."""
    created_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    expires_at = datetime.now(timezone.utc)
    raw = f"""{{
        "authentication_uuid": "{auth_uuid}",
        "status": "pending",
        "created_at": "{rfc3339(created_at)}",
        "expires_at": "{rfc3339(expires_at)}"
    }}"""
    return raw, created_at, expires_at


@pytest.fixture(scope="function")
def check_success_body(auth_uuid) -> str:
    return f"""{{
        "authentication_uuid": "{auth_uuid}",
        "status": "valid"
    }}"""


@pytest.fixture(scope="function")
def retry_success_body(auth_uuid):
    created_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    next_retry_at = datetime.now(timezone.utc)
    raw = f"""{{
        "authentication_uuid": "{auth_uuid}",
        "status": "expired_auth",
        "created_at": "{rfc3339(created_at)}",
        "next_retry_at": "{rfc3339(next_retry_at)}",
        "remaining_retry": 0
    }}"""
    return raw, created_at, next_retry_at


@pytest.fixture(scope="function")
def error_body():
    def _make(code: str) -> str:
        return f"""{{
            "code": "{code}",
            "message": "+invalid is not a valid phone number",
            "doc_url": "https://docs.ding.live/api/error-handling#{code}"
        }}"""

    return _make
