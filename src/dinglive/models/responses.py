"""
Response Payloads Module.

Defines the shapes of the JSON bodies returned by the Ding API: one success
payload per endpoint and the error payload shared by all of them.

Status and error-code fields are tolerant: a value the SDK does not know is
decoded to the enum's `Unknown` member rather than failing validation.
"""

from datetime import datetime
from typing import Annotated, Type

from pydantic import BeforeValidator

from ..enum import AuthStatus, CheckStatus, ErrorCode, RetryStatus
from .base_model import BaseModel, truncate_fraction


def _tolerant(enum_cls: Type):
    """Validator resolving raw strings through the enum's own fallback."""

    def _coerce(value):
        if isinstance(value, str):
            return enum_cls(value)
        return value

    return BeforeValidator(_coerce)


Timestamp = Annotated[datetime, BeforeValidator(truncate_fraction)]

# Servers may send `null` for empty strings.
NullableStr = Annotated[
    str, BeforeValidator(lambda value: "" if value is None else value)
]


class AuthSuccessResponse(BaseModel):
    authentication_uuid: str
    status: Annotated[AuthStatus, _tolerant(AuthStatus)]
    created_at: Timestamp
    expires_at: Timestamp


class CheckSuccessResponse(BaseModel):
    authentication_uuid: str
    status: Annotated[CheckStatus, _tolerant(CheckStatus)]


class RetrySuccessResponse(BaseModel):
    authentication_uuid: str
    status: Annotated[RetryStatus, _tolerant(RetryStatus)]
    created_at: Timestamp
    next_retry_at: Timestamp
    remaining_retry: int


class ErrorResponse(BaseModel):
    """Body of any non-200, non-403 response."""

    code: Annotated[ErrorCode, _tolerant(ErrorCode)] = ErrorCode.Unknown
    message: NullableStr = ""
    doc_url: NullableStr = ""
