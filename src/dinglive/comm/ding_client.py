"""
Ding Client Entry Point.

This module provides `DingClient` and `AsyncDingClient`, the primary interfaces
for calling the Ding phone-number authentication API. Every operation follows
the same protocol:

1.  **Validate** the caller input locally (no network call on bad input).
2.  **Build** the wire request.
3.  **Call** the transport and decode the response.
4.  **Normalize** any failure into the `DingError` taxonomy.

The clients keep no state between calls besides the HTTP connection pool, so a
single instance can be shared by concurrent callers.
"""

# --- Python Standard Library Imports ---
from enum import Enum
from typing import Any, Optional, Type

# --- Local/Project-Specific Imports ---
from ..config import ClientConfig
from ..enum import DeviceType
from ..errors import (
    InvalidAuthenticationUUIDError,
    InvalidCallbackURLError,
    InvalidCustomerUUIDError,
    InvalidPhoneNumberError,
    TransportError,
    normalize_error_code,
    normalize_transport_error,
)
from ..helpers import (
    is_valid_phone_number,
    is_valid_url,
    is_valid_uuid,
    mask_phone_number,
)
from ..logger import LeveledLogger, default_logger
from ..models import AuthRequest, Authentication, Check, CheckRequest, Retry, RetryRequest
from .api import APIResponse, T_Success, _API, _AsyncAPI
from .transport import _AsyncTransport, _Transport


class _ClientStatus(Enum):
    """Lifecycle state of a client."""

    Open = "open"
    Closed = "closed"


class _BaseDingClient:
    """
    Input validation, request building and result unwrapping shared by the
    blocking and the async client.
    """

    _status: _ClientStatus = _ClientStatus.Closed
    """Tracks whether the client can still be used."""

    def __init__(self, config: ClientConfig):
        if not is_valid_uuid(config.customer_uuid):
            raise InvalidCustomerUUIDError()

        self._customer_uuid = config.customer_uuid
        self._logger: LeveledLogger = config.logger or default_logger()

    @property
    def customer_uuid(self) -> str:
        """Returns the customer UUID bound to this client."""
        return self._customer_uuid

    def _build_auth_request(
        self,
        phone_number: str,
        ip: Optional[str],
        device_id: Optional[str],
        device_type: Optional[DeviceType],
        app_version: Optional[str],
        callback_url: Optional[str],
        is_returning_user: bool,
    ) -> AuthRequest:
        if not is_valid_phone_number(phone_number):
            self._logger.debug(
                f"rejected invalid phone number '{mask_phone_number(phone_number)}'"
            )
            raise InvalidPhoneNumberError()

        if callback_url is not None and not is_valid_url(callback_url):
            raise InvalidCallbackURLError()

        return AuthRequest(
            phone_number=phone_number,
            customer_uuid=self._customer_uuid,
            ip=ip,
            device_id=device_id,
            device_type=DeviceType(device_type).value if device_type is not None else None,
            app_version=app_version,
            callback_url=callback_url,
            is_returning_user=is_returning_user,
        )

    def _build_check_request(self, authentication_uuid: str, code: str) -> CheckRequest:
        self._validate_authentication_uuid(authentication_uuid)
        # The server is authoritative on the code format.
        return CheckRequest(
            customer_uuid=self._customer_uuid,
            authentication_uuid=authentication_uuid,
            check_code=code,
        )

    def _build_retry_request(self, authentication_uuid: str) -> RetryRequest:
        self._validate_authentication_uuid(authentication_uuid)
        return RetryRequest(
            customer_uuid=self._customer_uuid,
            authentication_uuid=authentication_uuid,
        )

    @staticmethod
    def _validate_authentication_uuid(authentication_uuid: str):
        if not is_valid_uuid(authentication_uuid):
            raise InvalidAuthenticationUUIDError()

    @staticmethod
    def _unwrap(res: APIResponse[T_Success]) -> T_Success:
        """Returns the success payload, or raises the error the server reported."""
        if res.error is not None:
            raise normalize_error_code(res.error)
        assert res.success is not None
        return res.success

    def _check_open(self):
        if self._status != _ClientStatus.Open:
            raise RuntimeError(f"{type(self).__name__} has been closed.")


class DingClient(_BaseDingClient):
    """
    The blocking client for the Ding API.

    Every operation accepts an optional `timeout`, a deadline in seconds for
    the whole call including retries.

    Usage:
        This class can be used as a Context Manager:
        ```python
        with DingClient(ClientConfig(customer_uuid=..., api_key=...)) as client:
            auth = client.authenticate("+33612345678")
            check = client.check(auth.authentication_uuid, "123456")
        ```

    Raises:
        InvalidCustomerUUIDError: If `config.customer_uuid` is not a valid UUID.
    """

    def __init__(self, config: ClientConfig):
        super().__init__(config)
        self._transport = _Transport(config, self._logger)
        self._api = _API(self._transport, self._logger)
        self._status = _ClientStatus.Open

    # --- Context Manager Protocol ---

    def __enter__(self) -> "DingClient":
        """Context manager entry point."""
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> bool:
        """
        Context manager exit point. Ensures resources are closed.

        Returns:
            bool: False, to propagate any exceptions raised within the `with` block.
        """
        self.close()
        return False

    # --- Main API Methods ---

    def authenticate(
        self,
        phone_number: str,
        *,
        ip: Optional[str] = None,
        device_id: Optional[str] = None,
        device_type: Optional[DeviceType] = None,
        app_version: Optional[str] = None,
        callback_url: Optional[str] = None,
        is_returning_user: bool = False,
        timeout: Optional[float] = None,
    ) -> Authentication:
        """
        Sends a code to a phone number, starting a new authentication.

        Only `phone_number` is required. The other options are used by the Ding
        antispam system and are recommended.

        Args:
            phone_number (str): The number to authenticate, with its country code.
            ip (Optional[str]): IP address of the end user.
            device_id (Optional[str]): Identifier of the end user device.
            device_type (Optional[DeviceType]): Platform of the end user device.
            app_version (Optional[str]): Version of your application.
            callback_url (Optional[str]): Absolute URL notified of status changes.
            is_returning_user (bool): Whether the user already authenticated before.
            timeout (Optional[float]): Deadline in seconds for the whole call.

        Returns:
            Authentication: The authentication as reported by the server.

        Raises:
            InvalidPhoneNumberError: If the number is invalid (checked before any call).
            InvalidCallbackURLError: If `callback_url` is not an absolute URL.
            DingError: Any other error of the taxonomy reported by the call.
        """
        self._check_open()
        req = self._build_auth_request(
            phone_number,
            ip,
            device_id,
            device_type,
            app_version,
            callback_url,
            is_returning_user,
        )

        try:
            res = self._api.authentication(req, timeout)
        except TransportError as e:
            raise normalize_transport_error(e) from e

        return Authentication.from_response(self._unwrap(res))

    def check(
        self, authentication_uuid: str, code: str, *, timeout: Optional[float] = None
    ) -> Check:
        """
        Checks the code the user entered for an authentication.

        Args:
            authentication_uuid (str): The UUID returned by `authenticate`.
            code (str): The code entered by the user, sent as-is.
            timeout (Optional[float]): Deadline in seconds for the whole call.

        Returns:
            Check: The outcome of the check.

        Raises:
            InvalidAuthenticationUUIDError: If `authentication_uuid` is not a UUID.
            DingError: Any other error of the taxonomy reported by the call.
        """
        self._check_open()
        req = self._build_check_request(authentication_uuid, code)

        try:
            res = self._api.check(req, timeout)
        except TransportError as e:
            raise normalize_transport_error(e) from e

        return Check.from_response(self._unwrap(res))

    def retry(
        self, authentication_uuid: str, *, timeout: Optional[float] = None
    ) -> Retry:
        """
        Sends a new code for an existing authentication.

        Args:
            authentication_uuid (str): The UUID returned by `authenticate`.
            timeout (Optional[float]): Deadline in seconds for the whole call.

        Returns:
            Retry: The outcome of the retry.

        Raises:
            InvalidAuthenticationUUIDError: If `authentication_uuid` is not a UUID.
            DingError: Any other error of the taxonomy reported by the call.
        """
        self._check_open()
        req = self._build_retry_request(authentication_uuid)

        try:
            res = self._api.retry(req, timeout)
        except TransportError as e:
            raise normalize_transport_error(e) from e

        return Retry.from_response(self._unwrap(res))

    def close(self):
        """
        Releases the HTTP connection pool, if it is owned by the client.

        A custom `http_client` passed through the config is left open.
        """
        if self._status == _ClientStatus.Open:
            self._transport.close()
            self._status = _ClientStatus.Closed


class AsyncDingClient(_BaseDingClient):
    """
    The asyncio client for the Ding API.

    Operations are coroutines mirroring `DingClient`. Cancelling the awaiting
    task aborts the in-flight request and any pending retry.

    Usage:
        ```python
        async with AsyncDingClient(ClientConfig(customer_uuid=..., api_key=...)) as client:
            auth = await client.authenticate("+33612345678")
        ```
    """

    def __init__(self, config: ClientConfig):
        super().__init__(config)
        self._transport = _AsyncTransport(config, self._logger)
        self._api = _AsyncAPI(self._transport, self._logger)
        self._status = _ClientStatus.Open

    async def __aenter__(self) -> "AsyncDingClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> bool:
        await self.aclose()
        return False

    async def authenticate(
        self,
        phone_number: str,
        *,
        ip: Optional[str] = None,
        device_id: Optional[str] = None,
        device_type: Optional[DeviceType] = None,
        app_version: Optional[str] = None,
        callback_url: Optional[str] = None,
        is_returning_user: bool = False,
        timeout: Optional[float] = None,
    ) -> Authentication:
        """See `DingClient.authenticate`."""
        self._check_open()
        req = self._build_auth_request(
            phone_number,
            ip,
            device_id,
            device_type,
            app_version,
            callback_url,
            is_returning_user,
        )

        try:
            res = await self._api.authentication(req, timeout)
        except TransportError as e:
            raise normalize_transport_error(e) from e

        return Authentication.from_response(self._unwrap(res))

    async def check(
        self, authentication_uuid: str, code: str, *, timeout: Optional[float] = None
    ) -> Check:
        """See `DingClient.check`."""
        self._check_open()
        req = self._build_check_request(authentication_uuid, code)

        try:
            res = await self._api.check(req, timeout)
        except TransportError as e:
            raise normalize_transport_error(e) from e

        return Check.from_response(self._unwrap(res))

    async def retry(
        self, authentication_uuid: str, *, timeout: Optional[float] = None
    ) -> Retry:
        """See `DingClient.retry`."""
        self._check_open()
        req = self._build_retry_request(authentication_uuid)

        try:
            res = await self._api.retry(req, timeout)
        except TransportError as e:
            raise normalize_transport_error(e) from e

        return Retry.from_response(self._unwrap(res))

    async def aclose(self):
        """Releases the HTTP connection pool, if it is owned by the client."""
        if self._status == _ClientStatus.Open:
            await self._transport.aclose()
            self._status = _ClientStatus.Closed
