"""
Public result types returned by the client operations.

Each result is a read-only snapshot of the server state at the time of the
call; the client keeps no state about an authentication between calls.
"""

from dataclasses import dataclass
from datetime import datetime

from ..enum import AuthStatus, CheckStatus, RetryStatus
from .responses import AuthSuccessResponse, CheckSuccessResponse, RetrySuccessResponse


@dataclass(frozen=True)
class Authentication:
    """
    Result of an authentication request.

    Attributes:
        authentication_uuid (str): Server-issued identifier, used by `check` and `retry`.
        status (AuthStatus): State of the authentication.
        created_at (datetime): Creation time, as reported by the server.
        expires_at (datetime): Expiry time, as reported by the server.

    Timestamps keep microsecond precision: digits the server sends beyond
    microseconds are truncated.
    """

    authentication_uuid: str
    status: AuthStatus
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_response(cls, res: AuthSuccessResponse) -> "Authentication":
        return cls(
            authentication_uuid=res.authentication_uuid,
            status=res.status,
            created_at=res.created_at,
            expires_at=res.expires_at,
        )


@dataclass(frozen=True)
class Check:
    """Result of a check request."""

    authentication_uuid: str
    status: CheckStatus

    @classmethod
    def from_response(cls, res: CheckSuccessResponse) -> "Check":
        return cls(authentication_uuid=res.authentication_uuid, status=res.status)


@dataclass(frozen=True)
class Retry:
    """
    Result of a retry request.

    Attributes:
        authentication_uuid (str): Identifier of the retried authentication.
        status (RetryStatus): Whether a new code was sent, and if not, why.
        created_at (datetime): Time of the retry, as reported by the server.
        next_retry_at (datetime): Earliest time another retry will be accepted.
        remaining_retry (int): Number of retries left for this authentication.

    Timestamps keep microsecond precision: digits the server sends beyond
    microseconds are truncated.
    """

    authentication_uuid: str
    status: RetryStatus
    created_at: datetime
    next_retry_at: datetime
    remaining_retry: int

    @classmethod
    def from_response(cls, res: RetrySuccessResponse) -> "Retry":
        return cls(
            authentication_uuid=res.authentication_uuid,
            status=res.status,
            created_at=res.created_at,
            next_retry_at=res.next_retry_at,
            remaining_retry=res.remaining_retry,
        )
