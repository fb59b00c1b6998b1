"""
Errors Module.

Defines the closed set of exceptions raised by the client, and the functions
that normalize transport failures and server error codes into them. Nothing
else (no `httpx` exception, HTTP status, or validation error) is raised from a
public client operation.
"""

from typing import Dict, Optional, Type

from .enum import ErrorCode
from .models import ErrorResponse


class DingError(Exception):
    """
    Base class of every error raised by the client.

    When the error comes from an error payload returned by the server, `code`,
    `message` and `doc_url` hold its content.
    """

    default_message = "ding error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[ErrorCode] = None,
        doc_url: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.code = code
        self.doc_url = doc_url
        super().__init__(self.message)


class InvalidAPIKeyError(DingError):
    default_message = "unauthorized, please check your API key"


class InternalError(DingError):
    default_message = "an unhandled error occurred"


class InvalidPhoneNumberError(DingError):
    default_message = "invalid phone number"


class InvalidCustomerUUIDError(DingError):
    default_message = "invalid account UUID"


class NegativeBalanceError(DingError):
    default_message = "negative balance"


class UnsupportedRegionError(DingError):
    default_message = "unsupported region"


class InvalidAuthenticationUUIDError(DingError):
    default_message = "invalid authentication UUID"


class InvalidCallbackURLError(DingError):
    default_message = "invalid callback URL"


# --- Internal transport errors ---
# Raised by the transport and the response decoder, never outside the client.


class TransportError(Exception):
    """A request could not produce a usable response."""


class UnauthorizedTransportError(TransportError):
    """The API gateway rejected the API key (HTTP 403)."""


class CancelledTransportError(TransportError):
    """The caller deadline expired before a usable response was obtained."""


# --- Normalization ---

_ERROR_CODE_TO_ERROR: Dict[ErrorCode, Type[DingError]] = {
    ErrorCode.InvalidPhoneNumber: InvalidPhoneNumberError,
    ErrorCode.InvalidLine: InvalidPhoneNumberError,
    ErrorCode.AccountInvalid: InvalidCustomerUUIDError,
    ErrorCode.NegativeBalance: NegativeBalanceError,
    ErrorCode.UnsupportedRegion: UnsupportedRegionError,
    ErrorCode.InvalidAuthUUID: InvalidAuthenticationUUIDError,
}


def normalize_transport_error(err: TransportError) -> DingError:
    """Maps an internal transport error to the public taxonomy."""
    if isinstance(err, UnauthorizedTransportError):
        return InvalidAPIKeyError()
    return InternalError()


def normalize_error_code(err: ErrorResponse) -> DingError:
    """
    Maps a server error payload to the public taxonomy.

    Codes outside the table (including `Unknown`) become `InternalError`.
    """
    error_cls = _ERROR_CODE_TO_ERROR.get(err.code, InternalError)
    return error_cls(err.message or None, code=err.code, doc_url=err.doc_url or None)
