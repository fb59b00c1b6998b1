from .endpoint import Endpoint as Endpoint
from .error_code import ErrorCode as ErrorCode
from .status import (
    AuthStatus as AuthStatus,
    CheckStatus as CheckStatus,
    RetryStatus as RetryStatus,
    DeviceType as DeviceType,
)
