"""
Tests for the resilient transport's strategy chain and backoff.
"""

import asyncio

import httpx
import pytest

from nekofetch.images import (
    FetchCancelledError,
    HttpStatusError,
    ResilientTransport,
    TransportError,
)
from nekofetch.images.transport import (
    DESKTOP_USER_AGENT,
    MOBILE_USER_AGENT,
    build_strategies,
    detect_client_type,
)

URL = "https://nekos.life/api/v2/img/waifu"
BODY = {"url": "https://cdn.nekos.life/waifu/waifu_031.jpg"}


class FlakyHandler:
    """MockTransport handler that raises ConnectError for the first N calls."""

    def __init__(self, failures: int, status: int = 200):
        self.failures = failures
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.requests) <= self.failures:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(self.status, json=BODY)


class TestClientDetection:
    def test_mobile_descriptors(self):
        assert detect_client_type("Mozilla/5.0 (Linux; Android 14; Pixel 8)") == "mobile"
        assert detect_client_type("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0)") == "mobile"
        assert detect_client_type("ipad") == "mobile"

    def test_desktop_descriptors(self):
        assert detect_client_type("Mozilla/5.0 (Windows NT 10.0; Win64; x64)") == "desktop"
        assert detect_client_type("") == "desktop"
        assert detect_client_type(None) == "desktop"

    def test_strategy_chain(self):
        strategies = build_strategies("Android")
        assert [s.name for s in strategies] == ["browser:mobile", "anonymous", "no_cache"]
        assert strategies[0].headers["User-Agent"] == MOBILE_USER_AGENT
        assert strategies[1].anonymous
        assert strategies[2].headers["Cache-Control"] == "no-cache"


class TestFetchRaw:
    async def test_first_attempt_success(self, image_config, recording_sleep, mock_client):
        handler = FlakyHandler(failures=0)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        response = await transport.fetch_raw(URL)

        assert response.json() == BODY
        assert len(handler.requests) == 1
        assert handler.requests[0].headers["User-Agent"] == DESKTOP_USER_AGENT
        assert recording_sleep.delays == []

    async def test_third_strategy_succeeds_after_backoff(self, image_config, recording_sleep, mock_client):
        handler = FlakyHandler(failures=2)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        response = await transport.fetch_raw(URL)

        assert response.status_code == 200
        assert len(handler.requests) == 3
        # Linear backoff: 500ms then 1000ms
        assert recording_sleep.delays == [0.5, 1.0]
        assert sum(recording_sleep.delays) >= 1.5

    async def test_each_attempt_uses_a_distinct_strategy(self, image_config, recording_sleep, mock_client):
        handler = FlakyHandler(failures=2)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        await transport.fetch_raw(URL)

        browser, anonymous, no_cache = handler.requests
        assert browser.headers["User-Agent"] == DESKTOP_USER_AGENT
        assert "User-Agent" not in anonymous.headers
        assert no_cache.headers["Cache-Control"] == "no-cache"
        assert no_cache.headers["Pragma"] == "no-cache"
        assert no_cache.headers["Sec-Fetch-Mode"] == "cors"

    async def test_mobile_profile_from_descriptor(self, image_config, recording_sleep, mock_client):
        image_config.client_descriptor = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)"
        handler = FlakyHandler(failures=0)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        await transport.fetch_raw(URL)

        assert handler.requests[0].headers["User-Agent"] == MOBILE_USER_AGENT

    async def test_all_strategies_fail(self, image_config, recording_sleep, mock_client):
        handler = FlakyHandler(failures=3)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        with pytest.raises(TransportError) as exc_info:
            await transport.fetch_raw(URL)

        assert len(handler.requests) == 3
        assert exc_info.value.attempts == 3
        assert isinstance(exc_info.value.last_error, httpx.ConnectError)
        assert exc_info.value.__cause__ is exc_info.value.last_error
        # No wait after the last attempt
        assert recording_sleep.delays == [0.5, 1.0]

    async def test_timeouts_advance_the_chain(self, image_config, recording_sleep, mock_client):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200, json=BODY)

        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        response = await transport.fetch_raw(URL)

        assert response.status_code == 200
        assert len(calls) == 2
        assert recording_sleep.delays == [0.5]


class TestStatusErrors:
    """Non-2xx statuses are final; only raised exceptions are retried."""

    async def test_server_error_is_not_retried(self, image_config, recording_sleep, mock_client):
        # A transient 500 is surfaced at once instead of moving to the next strategy
        handler = FlakyHandler(failures=0, status=500)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        with pytest.raises(HttpStatusError) as exc_info:
            await transport.fetch_raw(URL)

        assert exc_info.value.status_code == 500
        assert len(handler.requests) == 1
        assert recording_sleep.delays == []

    async def test_status_after_network_failure(self, image_config, recording_sleep, mock_client):
        handler = FlakyHandler(failures=1, status=404)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)

        with pytest.raises(HttpStatusError) as exc_info:
            await transport.fetch_raw(URL)

        assert exc_info.value.status_code == 404
        assert len(handler.requests) == 2
        assert recording_sleep.delays == [0.5]


class TestCancellation:
    async def test_cancel_before_start(self, image_config, recording_sleep, mock_client):
        handler = FlakyHandler(failures=0)
        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)
        cancel = asyncio.Event()
        cancel.set()

        with pytest.raises(FetchCancelledError):
            await transport.fetch_raw(URL, cancel)

        assert handler.requests == []

    async def test_cancel_aborts_in_flight_request(self, image_config, recording_sleep, mock_client):
        started = asyncio.Event()

        async def handler(request):
            started.set()
            await asyncio.sleep(30)
            return httpx.Response(200, json=BODY)

        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=recording_sleep)
        cancel = asyncio.Event()

        async def cancel_when_started():
            await started.wait()
            cancel.set()

        canceller = asyncio.create_task(cancel_when_started())
        with pytest.raises(FetchCancelledError):
            await asyncio.wait_for(transport.fetch_raw(URL, cancel), timeout=5)
        await canceller

        assert recording_sleep.delays == []

    async def test_cancel_during_backoff_skips_remaining_attempts(self, image_config, mock_client):
        handler = FlakyHandler(failures=3)
        cancel = asyncio.Event()

        async def cancelling_sleep(delay):
            cancel.set()
            await asyncio.sleep(30)

        transport = ResilientTransport(image_config, client=mock_client(handler), sleep=cancelling_sleep)

        with pytest.raises(FetchCancelledError):
            await asyncio.wait_for(transport.fetch_raw(URL, cancel), timeout=5)

        assert len(handler.requests) == 1


class TestLifecycle:
    async def test_injected_client_is_not_closed(self, image_config, mock_client):
        client = mock_client(FlakyHandler(failures=0))
        async with ResilientTransport(image_config, client=client) as transport:
            await transport.fetch_raw(URL)
        assert not client.is_closed
        await client.aclose()

    async def test_owned_client_is_closed(self, image_config):
        transport = ResilientTransport(image_config)
        client = await transport._get_client()
        await transport.close()
        assert client.is_closed
