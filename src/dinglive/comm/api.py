"""
API Response Decoder.

This module provides a generic decode routine (`_decode_response`) turning a raw
`httpx.Response` into an `APIResponse[T]`, holding either the typed success
payload of the endpoint or the typed error payload returned by the server.

It employs a Registry (`_SUCCESS_MODELS`) mapping each `Endpoint` to its success
model, so that the three endpoints share one decode path instead of three
copies of it. `_API` and `_AsyncAPI` bind the registry to a transport.
"""

from dataclasses import dataclass
from typing import Dict, Generic, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from ..enum import Endpoint
from ..errors import TransportError, UnauthorizedTransportError
from ..logger import LeveledLogger
from ..models import (
    AuthRequest,
    AuthSuccessResponse,
    CheckRequest,
    CheckSuccessResponse,
    ErrorResponse,
    RetryRequest,
    RetrySuccessResponse,
)
from ..models.base_model import BaseModel
from .transport import _AsyncTransport, _Transport

# Generic TypeVar allowing _decode_response to return the success payload requested
T_Success = TypeVar("T_Success", bound=BaseModel)

# Registry mapping Endpoint -> success payload model
_SUCCESS_MODELS: Dict[Endpoint, Type[BaseModel]] = {
    Endpoint.AUTHENTICATION: AuthSuccessResponse,
    Endpoint.CHECK: CheckSuccessResponse,
    Endpoint.RETRY: RetrySuccessResponse,
}


@dataclass
class APIResponse(Generic[T_Success]):
    """Exactly one of `success` and `error` is set."""

    success: Optional[T_Success] = None
    error: Optional[ErrorResponse] = None


def _decode_response(
    response: httpx.Response,
    endpoint: Endpoint,
    expected_type: Type[T_Success],
    logger: LeveledLogger,
) -> APIResponse[T_Success]:
    """
    Classifies a raw response and deserializes its body.

    Args:
        response (httpx.Response): The final response produced by the transport.
        endpoint (Endpoint): The endpoint the response comes from.
        expected_type (Type): The success model the caller expects.
        logger (LeveledLogger): Logger for error reporting.

    Returns:
        APIResponse[T_Success]: The success payload (HTTP 200) or the server
                                error payload (any other status but 403).

    Raises:
        TypeError: If `expected_type` is not the model registered for `endpoint`.
        UnauthorizedTransportError: On HTTP 403, whatever the body.
        TransportError: If the body does not match the expected shape.
    """
    # Ensure the registered class matches what the caller expects
    response_cls = _SUCCESS_MODELS[endpoint]
    if response_cls is not expected_type:
        raise TypeError(
            f"Endpoint '{endpoint}' returns {response_cls.__name__}, "
            f"but {expected_type.__name__} was expected"
        )

    if response.status_code != httpx.codes.OK:
        logger.error(
            f"received a non-200 HTTP status {response.status_code} from '{endpoint}'"
        )

        if response.status_code == httpx.codes.FORBIDDEN:
            # The gateway body is informative only; it never changes the outcome.
            logger.debug(f"gateway rejection body: {response.text!r}")
            raise UnauthorizedTransportError(f"API key rejected on '{endpoint}'")

        try:
            error = ErrorResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"unable to decode error response from '{endpoint}': {e}")
            raise TransportError(f"undecodable error body from '{endpoint}'") from e

        return APIResponse(error=error)

    try:
        success = expected_type.model_validate_json(response.content)
    except ValidationError as e:
        logger.error(
            f"unable to decode response of HTTP OK status from '{endpoint}': {e}"
        )
        raise TransportError(f"undecodable success body from '{endpoint}'") from e

    return APIResponse(success=success)


class _API:
    """Typed endpoint calls over the blocking transport."""

    def __init__(self, transport: _Transport, logger: LeveledLogger):
        self._transport = transport
        self._logger = logger

    def authentication(
        self, req: AuthRequest, timeout: Optional[float] = None
    ) -> APIResponse[AuthSuccessResponse]:
        res = self._transport.post(Endpoint.AUTHENTICATION, req.to_payload(), timeout)
        return _decode_response(
            res, Endpoint.AUTHENTICATION, AuthSuccessResponse, self._logger
        )

    def check(
        self, req: CheckRequest, timeout: Optional[float] = None
    ) -> APIResponse[CheckSuccessResponse]:
        res = self._transport.post(Endpoint.CHECK, req.to_payload(), timeout)
        return _decode_response(res, Endpoint.CHECK, CheckSuccessResponse, self._logger)

    def retry(
        self, req: RetryRequest, timeout: Optional[float] = None
    ) -> APIResponse[RetrySuccessResponse]:
        res = self._transport.post(Endpoint.RETRY, req.to_payload(), timeout)
        return _decode_response(res, Endpoint.RETRY, RetrySuccessResponse, self._logger)


class _AsyncAPI:
    """Typed endpoint calls over the non-blocking transport."""

    def __init__(self, transport: _AsyncTransport, logger: LeveledLogger):
        self._transport = transport
        self._logger = logger

    async def authentication(
        self, req: AuthRequest, timeout: Optional[float] = None
    ) -> APIResponse[AuthSuccessResponse]:
        res = await self._transport.post(
            Endpoint.AUTHENTICATION, req.to_payload(), timeout
        )
        return _decode_response(
            res, Endpoint.AUTHENTICATION, AuthSuccessResponse, self._logger
        )

    async def check(
        self, req: CheckRequest, timeout: Optional[float] = None
    ) -> APIResponse[CheckSuccessResponse]:
        res = await self._transport.post(Endpoint.CHECK, req.to_payload(), timeout)
        return _decode_response(res, Endpoint.CHECK, CheckSuccessResponse, self._logger)

    async def retry(
        self, req: RetryRequest, timeout: Optional[float] = None
    ) -> APIResponse[RetrySuccessResponse]:
        res = await self._transport.post(Endpoint.RETRY, req.to_payload(), timeout)
        return _decode_response(res, Endpoint.RETRY, RetrySuccessResponse, self._logger)
