from .comm import (
    DingClient as DingClient,
    AsyncDingClient as AsyncDingClient,
)

from .config import (
    ClientConfig as ClientConfig,
    API_BASE_URL as API_BASE_URL,
)

from .enum import (
    AuthStatus as AuthStatus,
    CheckStatus as CheckStatus,
    RetryStatus as RetryStatus,
    DeviceType as DeviceType,
    ErrorCode as ErrorCode,
)

from .errors import (
    DingError as DingError,
    InvalidAPIKeyError as InvalidAPIKeyError,
    InternalError as InternalError,
    InvalidPhoneNumberError as InvalidPhoneNumberError,
    InvalidCustomerUUIDError as InvalidCustomerUUIDError,
    NegativeBalanceError as NegativeBalanceError,
    UnsupportedRegionError as UnsupportedRegionError,
    InvalidAuthenticationUUIDError as InvalidAuthenticationUUIDError,
    InvalidCallbackURLError as InvalidCallbackURLError,
)

from .logger import LeveledLogger as LeveledLogger

from .models import (
    Authentication as Authentication,
    Check as Check,
    Retry as Retry,
)

# useful to do like: `from dinglive import DingClient`
__all__ = [
    "API_BASE_URL",
    "AsyncDingClient",
    "AuthStatus",
    "Authentication",
    "Check",
    "CheckStatus",
    "ClientConfig",
    "DeviceType",
    "DingClient",
    "DingError",
    "ErrorCode",
    "InternalError",
    "InvalidAPIKeyError",
    "InvalidAuthenticationUUIDError",
    "InvalidCallbackURLError",
    "InvalidCustomerUUIDError",
    "InvalidPhoneNumberError",
    "LeveledLogger",
    "NegativeBalanceError",
    "Retry",
    "RetryStatus",
    "UnsupportedRegionError",
]
