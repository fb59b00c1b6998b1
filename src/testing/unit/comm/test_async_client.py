import asyncio

import httpx
import pytest

from dinglive import (
    AsyncDingClient,
    AuthStatus,
    CheckStatus,
    InternalError,
    InvalidAPIKeyError,
    InvalidPhoneNumberError,
    NegativeBalanceError,
    RetryStatus,
)
from testing.unit.helpers import (
    TEST_INVALID_API_KEY,
    TEST_PHONE_NUMBER,
    RecordingHandler,
    make_async_config,
    mock_server,
)


def _client(handler=None, **kwargs) -> AsyncDingClient:
    return AsyncDingClient(make_async_config(handler, **kwargs))


@pytest.mark.asyncio
async def test_authenticate_check_retry(
    auth_success_body, check_success_body, retry_success_body, auth_uuid
):
    raw_auth, _, _ = auth_success_body
    raw_retry, _, _ = retry_success_body
    handler = RecordingHandler(
        replies=[(200, raw_auth), (200, check_success_body), (200, raw_retry)]
    )

    async with _client(handler) as client:
        auth = await client.authenticate(TEST_PHONE_NUMBER)
        check = await client.check(auth.authentication_uuid, "1234")
        retry = await client.retry(auth.authentication_uuid)

    assert auth.status == AuthStatus.Pending
    assert check.status == CheckStatus.Valid
    assert retry.status == RetryStatus.ExpiredAuth
    assert [r.url.path for r in handler.requests] == [
        "/v1/authentication",
        "/v1/check",
        "/v1/retry",
    ]


@pytest.mark.asyncio
async def test_invalid_phone_number_sends_nothing():
    client = _client()

    with pytest.raises(InvalidPhoneNumberError):
        await client.authenticate("+invalid")


@pytest.mark.asyncio
async def test_invalid_api_key():
    client = _client(mock_server("{}"), api_key=TEST_INVALID_API_KEY)

    with pytest.raises(InvalidAPIKeyError):
        await client.authenticate(TEST_PHONE_NUMBER)


@pytest.mark.asyncio
async def test_server_error_code(error_body):
    client = _client(mock_server(error_body("negative_balance"), status=400))

    with pytest.raises(NegativeBalanceError):
        await client.authenticate(TEST_PHONE_NUMBER)


@pytest.mark.asyncio
async def test_transient_failures_are_retried(check_success_body, auth_uuid):
    handler = RecordingHandler(
        replies=[(0, httpx.ReadTimeout("read timed out")), (502, ""), (200, check_success_body)]
    )
    client = _client(handler)

    check = await client.check(auth_uuid, "1234")

    assert check.status == CheckStatus.Valid
    assert handler.calls == 3


@pytest.mark.asyncio
async def test_exhausted_retries_are_internal_error(auth_uuid):
    handler = mock_server("", status=500)
    client = _client(handler, max_network_retries=1)

    with pytest.raises(InternalError):
        await client.retry(auth_uuid)

    assert handler.calls == 2


@pytest.mark.asyncio
async def test_timeout_aborts_in_flight_request(auth_uuid):
    async def slow_server(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        return httpx.Response(200)

    client = _client(slow_server)

    with pytest.raises(InternalError):
        await client.check(auth_uuid, "1234", timeout=0.05)


@pytest.mark.asyncio
async def test_task_cancellation_propagates(auth_uuid):
    started = asyncio.Event()

    async def hanging_server(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200)

    client = _client(hanging_server)
    task = asyncio.create_task(client.check(auth_uuid, "1234"))
    await started.wait()

    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_closed_client_refuses_calls(auth_uuid):
    client = _client()
    await client.aclose()

    with pytest.raises(RuntimeError):
        await client.retry(auth_uuid)


@pytest.mark.asyncio
async def test_non_ascii_api_key_is_internal_error(auth_uuid):
    client = _client(api_key="clé")

    with pytest.raises(InternalError):
        await client.check(auth_uuid, "1234")
