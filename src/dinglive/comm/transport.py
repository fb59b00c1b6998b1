"""
Transport Module.

This module handles the HTTP exchanges with the Ding API. It wraps an `httpx`
client (sync or async) and exposes a single `post(path, payload)` primitive that:

1.  Serializes the payload to JSON and attaches the API key and content type.
2.  Retries transient failures (connection errors, timeouts, and a configurable
    set of HTTP statuses) with exponential backoff.
3.  Honors the caller deadline, aborting in-flight requests and pending retries.

The underlying connection pool is owned by the `httpx` client and is safe to
share between concurrent calls; the transport itself holds no per-call state.
"""

import asyncio
import json
import time
from itertools import count
from typing import Any, FrozenSet, Optional

import httpx

from ..config import ClientConfig
from ..errors import CancelledTransportError, TransportError
from ..logger import LeveledLogger

API_KEY_HEADER = "x-api-key"


class _RetryPolicy:
    """
    Decides whether a failed attempt is retried, and how long to wait before.

    The delay before retry `n` (0-based) is `wait_min * 2**n`, capped at
    `wait_max`. A `Retry-After` header in seconds, sent along a 429 or 503,
    takes precedence (still capped at `wait_max`).
    """

    def __init__(
        self,
        max_retries: int,
        wait_min: float,
        wait_max: float,
        statuses: FrozenSet[int],
    ):
        self.max_retries = max_retries
        self.wait_min = wait_min
        self.wait_max = wait_max
        self.statuses = statuses

    def is_retryable_status(self, status_code: int) -> bool:
        return status_code in self.statuses

    def is_retryable_error(self, err: Exception) -> bool:
        # Malformed URLs or schemes will not fix themselves.
        if isinstance(err, (httpx.UnsupportedProtocol, httpx.InvalidURL)):
            return False
        return isinstance(err, httpx.TransportError)

    def backoff(self, attempt: int, response: Optional[httpx.Response] = None) -> float:
        if response is not None and response.status_code in (429, 503):
            retry_after = response.headers.get("retry-after", "")
            if retry_after.isdigit():
                return min(float(retry_after), self.wait_max)
        return min(self.wait_min * (2**attempt), self.wait_max)


class _BaseTransport:
    """Shared request building and retry bookkeeping of both transports."""

    def __init__(self, config: ClientConfig, logger: LeveledLogger):
        self._base_url = config.base_url.rstrip("/")
        self._headers = {
            API_KEY_HEADER: config.api_key,
            "content-type": "application/json",
        }
        self._logger = logger
        self._policy = _RetryPolicy(
            max_retries=config.resolved_max_retries(),
            wait_min=config.retry_wait_min,
            wait_max=config.retry_wait_max,
            statuses=config.retry_statuses,
        )

    def _build_headers(self, path: str) -> httpx.Headers:
        try:
            return httpx.Headers(self._headers)
        except UnicodeEncodeError as e:
            # Header values must be ASCII.
            self._logger.error(f"build request headers for '{path}': {e}")
            raise TransportError(f"invalid request headers for '{path}'") from e

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    def _encode(self, path: str, payload: Any) -> bytes:
        try:
            return json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as e:
            self._logger.error(f"marshal request payload for '{path}': {e}")
            raise TransportError(f"unable to serialize payload for '{path}'") from e

    def _next_delay(
        self,
        path: str,
        attempt: int,
        response: Optional[httpx.Response],
        err: Optional[Exception],
    ) -> Optional[float]:
        """
        Classifies the outcome of an attempt.

        Returns:
            Optional[float]: `None` when `response` is final and must be handed
                             to the decoder, otherwise the delay before the next attempt.

        Raises:
            TransportError: If the failure is not retryable or retries are exhausted.
        """
        if err is not None:
            if not self._policy.is_retryable_error(err):
                self._logger.error(f"perform HTTP request to '{path}': {err}")
                raise TransportError(f"request to '{path}' failed") from err
            reason = f"{type(err).__name__}: {err}"
        else:
            assert response is not None
            if not self._policy.is_retryable_status(response.status_code):
                return None
            reason = f"HTTP status {response.status_code}"

        if attempt >= self._policy.max_retries:
            self._logger.error(
                f"request to '{path}' giving up after {attempt + 1} attempt(s): {reason}"
            )
            raise TransportError(f"retries exhausted for '{path}'") from err

        delay = self._policy.backoff(attempt, response)
        self._logger.warning(
            f"request to '{path}' failed ({reason}), retrying in {delay:.2f}s "
            f"({self._policy.max_retries - attempt} left)"
        )
        return delay


class _Transport(_BaseTransport):
    """
    Blocking transport built on `httpx.Client`.

    The caller deadline (`timeout`) covers every attempt and every backoff: each
    request is bounded by the remaining time, and a backoff that would outlive
    the deadline is not slept.
    """

    def __init__(self, config: ClientConfig, logger: LeveledLogger):
        super().__init__(config, logger)
        self._owns_client = config.http_client is None
        self._client = config.http_client or httpx.Client(timeout=config.timeout)

    def post(
        self, path: str, payload: Any, timeout: Optional[float] = None
    ) -> httpx.Response:
        """
        Sends a JSON POST to `{base_url}/{path}`, retrying transient failures.

        Args:
            path (str): The endpoint path, without leading slash.
            payload (Any): A JSON-serializable body.
            timeout (Optional[float]): Deadline in seconds for the whole call.

        Returns:
            httpx.Response: The first non-retryable response, body already read.

        Raises:
            CancelledTransportError: If the deadline expires.
            TransportError: On any other terminal failure.
        """
        body = self._encode(path, payload)
        headers = self._build_headers(path)
        deadline = None if timeout is None else time.monotonic() + timeout

        for attempt in count():
            remaining = self._remaining(path, deadline)
            self._logger.debug(f"POST '{path}' (attempt {attempt + 1})")

            response: Optional[httpx.Response] = None
            err: Optional[Exception] = None
            try:
                response = self._client.post(
                    self._url(path),
                    content=body,
                    headers=headers,
                    timeout=(
                        remaining if remaining is not None else httpx.USE_CLIENT_DEFAULT
                    ),
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                err = e

            if err is not None and deadline is not None and time.monotonic() >= deadline:
                self._logger.error(f"request to '{path}' cancelled: deadline exceeded")
                raise CancelledTransportError(f"deadline exceeded for '{path}'") from err

            delay = self._next_delay(path, attempt, response, err)
            if delay is None:
                assert response is not None
                return response

            if deadline is not None and time.monotonic() + delay >= deadline:
                self._logger.error(
                    f"request to '{path}' cancelled: next retry would exceed the deadline"
                )
                raise CancelledTransportError(f"deadline exceeded for '{path}'")
            time.sleep(delay)

        raise TransportError("unreachable")

    def _remaining(self, path: str, deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            self._logger.error(f"request to '{path}' cancelled: deadline exceeded")
            raise CancelledTransportError(f"deadline exceeded for '{path}'")
        return remaining

    def close(self):
        """Closes the HTTP client, if it was created by the transport."""
        if self._owns_client:
            self._client.close()


class _AsyncTransport(_BaseTransport):
    """
    Non-blocking transport built on `httpx.AsyncClient`.

    Cancelling the calling task aborts the in-flight request or the pending
    backoff immediately. The optional `timeout` deadline is enforced with
    `asyncio.timeout` over the whole call.
    """

    def __init__(self, config: ClientConfig, logger: LeveledLogger):
        super().__init__(config, logger)
        self._owns_client = config.async_http_client is None
        self._client = config.async_http_client or httpx.AsyncClient(
            timeout=config.timeout
        )

    async def post(
        self, path: str, payload: Any, timeout: Optional[float] = None
    ) -> httpx.Response:
        """Async counterpart of `_Transport.post`."""
        body = self._encode(path, payload)
        headers = self._build_headers(path)
        try:
            async with asyncio.timeout(timeout):
                return await self._post_with_retries(path, body, headers)
        except TimeoutError as e:
            self._logger.error(f"request to '{path}' cancelled: deadline exceeded")
            raise CancelledTransportError(f"deadline exceeded for '{path}'") from e

    async def _post_with_retries(
        self, path: str, body: bytes, headers: httpx.Headers
    ) -> httpx.Response:
        for attempt in count():
            self._logger.debug(f"POST '{path}' (attempt {attempt + 1})")

            response: Optional[httpx.Response] = None
            err: Optional[Exception] = None
            try:
                response = await self._client.post(
                    self._url(path), content=body, headers=headers
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                err = e

            delay = self._next_delay(path, attempt, response, err)
            if delay is None:
                assert response is not None
                return response
            await asyncio.sleep(delay)

        raise TransportError("unreachable")

    async def aclose(self):
        """Closes the HTTP client, if it was created by the transport."""
        if self._owns_client:
            await self._client.aclose()
