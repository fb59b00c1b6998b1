"""
Configuration Module.

This module defines the configuration used to build a client: account
credentials, the retry policy of the transport, and the optional collaborators
(HTTP client, logger) the caller may inject.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

import httpx

from .logger import LeveledLogger

API_BASE_URL = "https://api.ding.live/v1"

DEFAULT_MAX_NETWORK_RETRIES = 3
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_RETRY_WAIT_MIN = 1.0
DEFAULT_RETRY_WAIT_MAX = 30.0
DEFAULT_RETRY_STATUSES: FrozenSet[int] = frozenset({429, 500, 502, 503, 504})


@dataclass
class ClientConfig:
    """
    Configuration settings for `DingClient` and `AsyncDingClient`.

    Attributes:
        customer_uuid (str): The UUID given to you during your onboarding.
        api_key (str): Your secret API key.
        max_network_retries (Optional[int]): Maximum number of times a request is
            retried after an intermittent failure. `None` means the default (3).
        http_client (Optional[httpx.Client]): HTTP client used by `DingClient`.
            If unset, the client builds and owns one.
        async_http_client (Optional[httpx.AsyncClient]): HTTP client used by
            `AsyncDingClient`. If unset, the client builds and owns one.
        logger (Optional[LeveledLogger]): Logger for errors, warnings and debug
            messages. Defaults to the `dinglive` logger.
        base_url (str): Root URL of the API.
        timeout (float): Per-request timeout in seconds of an SDK-built HTTP client.
        retry_wait_min (float): First backoff delay, in seconds.
        retry_wait_max (float): Upper bound of any backoff delay, in seconds.
        retry_statuses (FrozenSet[int]): HTTP statuses treated as transient.
    """

    customer_uuid: str
    api_key: str
    max_network_retries: Optional[int] = None
    http_client: Optional[httpx.Client] = None
    async_http_client: Optional[httpx.AsyncClient] = None
    logger: Optional[LeveledLogger] = None
    base_url: str = API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    retry_wait_min: float = DEFAULT_RETRY_WAIT_MIN
    retry_wait_max: float = DEFAULT_RETRY_WAIT_MAX
    retry_statuses: FrozenSet[int] = field(
        default_factory=lambda: DEFAULT_RETRY_STATUSES
    )

    def resolved_max_retries(self) -> int:
        """Returns the retry count to use, validating any explicit value."""
        if self.max_network_retries is None:
            return DEFAULT_MAX_NETWORK_RETRIES
        if self.max_network_retries < 0:
            raise ValueError(
                f"max_network_retries must be >= 0. Got {self.max_network_retries}"
            )
        return self.max_network_retries
