from .requests import (
    AuthRequest as AuthRequest,
    CheckRequest as CheckRequest,
    RetryRequest as RetryRequest,
)
from .responses import (
    AuthSuccessResponse as AuthSuccessResponse,
    CheckSuccessResponse as CheckSuccessResponse,
    RetrySuccessResponse as RetrySuccessResponse,
    ErrorResponse as ErrorResponse,
)
from .results import (
    Authentication as Authentication,
    Check as Check,
    Retry as Retry,
)
