from .status import _TolerantStrEnum


class ErrorCode(_TolerantStrEnum):
    """
    Machine-readable reasons the Ding API gives when rejecting a request.

    Codes the SDK does not know about resolve to `Unknown`.
    """

    Unknown = "unknown"

    InternalServerError = "internal_server_error"
    BadRequest = "bad_request"
    InvalidPhoneNumber = "invalid_phone_number"
    AccountInvalid = "account_invalid"
    NegativeBalance = "negative_balance"
    InvalidLine = "invalid_line"
    UnsupportedRegion = "unsupported_region"
    InvalidAuthUUID = "invalid_auth_uuid"
