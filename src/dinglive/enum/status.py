"""
Status Enumerations Module.

Defines the business states reported by the Ding API for authentications,
checks and retries. The server owns these state machines and may add new
states at any time: every status enum maps an unrecognized value to its
`Unknown` member instead of failing.
"""

from enum import StrEnum
from typing import Any


class _TolerantStrEnum(StrEnum):
    """
    String enum that resolves unrecognized string values to `Unknown`.

    Subclasses must declare an `Unknown` member.
    """

    @classmethod
    def _missing_(cls, value: Any):
        if isinstance(value, str):
            return cls["Unknown"]
        return None


class AuthStatus(_TolerantStrEnum):
    """
    State of an authentication, as returned by the `authentication` endpoint.
    """

    Unknown = "unknown"

    Pending = "pending"
    """The code has been sent and the authentication awaits a check."""

    RateLimited = "rate_limited"
    SpamDetected = "spam_detected"
    Approved = "approved"
    Canceled = "canceled"
    Expired = "expired"


class CheckStatus(_TolerantStrEnum):
    """
    Outcome of a code check, as returned by the `check` endpoint.
    """

    Unknown = "unknown"

    Valid = "valid"
    Invalid = "invalid"
    WithoutAttempt = "without_attempt"
    RateLimited = "rate_limited"
    AlreadyValidated = "already_validated"
    ExpiredAuth = "expired_auth"


class RetryStatus(_TolerantStrEnum):
    """Outcome of a retry request, as returned by the `retry` endpoint."""

    Unknown = "unknown"

    Approved = "approved"
    Denied = "denied"
    NoAttempt = "no_attempt"
    RateLimited = "rate_limited"
    ExpiredAuth = "expired_auth"
    AlreadyValidated = "already_validated"


class DeviceType(StrEnum):
    """Type of device the end user authenticates from."""

    Android = "ANDROID"
    IOS = "IOS"
    Web = "WEB"
