"""
Module: test_rain_check_delivery.py
Description: Integration tests for rain check delivery.

Runs the real transport client against a mocked HTTP endpoint (pytest-httpx)
with an in-memory list store: a failed send stores a rain check, and drain
calls keep resending it until the endpoint recovers.
"""

import json

import pytest

from raincheck.delivery.dispatcher import RainCheckDispatcher
from raincheck.delivery.transport import TransportClient
from raincheck.delivery.worker import RainCheckWorker
from raincheck.models import RequestRainCheck, RequestSpec

BASE_URL = "http://localhost:8080"


@pytest.fixture
def endpoint_fails_three_times(httpx_mock):
    """Endpoint that answers 500 three times, then 200."""
    for _ in range(3):
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/", status_code=500, json={})
    httpx_mock.add_response(method="POST", url=f"{BASE_URL}/", status_code=200, json={"status": "OK"})
    return httpx_mock


class TestRainCheckDelivery:
    """End-to-end rain check lifecycle."""

    @pytest.mark.asyncio
    async def test_resends_until_endpoint_recovers(self, endpoint_fails_three_times, memory_store, sample_params):
        request = RequestSpec(method="POST", path="/", body=json.dumps({"id": 123}))
        received = []

        async def on_success(result, params):
            received.append((result, params))

        def must_not_succeed(result, params):
            raise AssertionError("Should not succeed")

        async with TransportClient(BASE_URL) as transport:
            dispatcher = RainCheckDispatcher(transport, memory_store, store_timeout_ms=1000)
            worker = RainCheckWorker(dispatcher)

            reply = await dispatcher.send_request(request, sample_params)

            assert reply.error.status_code == 500
            assert len(memory_store.contents("myList")) == 1

            assert await worker.consume_rain_check("myList", must_not_succeed) is True
            assert await worker.consume_rain_check("myList", must_not_succeed) is True
            assert await worker.consume_rain_check("myList", on_success) is True

            assert await worker.consume_rain_check("myList") is False

        assert len(received) == 1
        result, params = received[0]
        assert params.id == "testRequest"
        assert params == sample_params
        assert result.body == {"status": "OK"}

        requests = endpoint_fails_three_times.get_requests()
        assert len(requests) == 4
        assert all(json.loads(r.content) == {"id": 123} for r in requests)
        assert memory_store.contents("myList") == []

    @pytest.mark.asyncio
    async def test_skip_listed_rejection_never_queued(self, httpx_mock, memory_store, sample_params):
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/", status_code=403)

        async with TransportClient(BASE_URL) as transport:
            dispatcher = RainCheckDispatcher(transport, memory_store)
            worker = RainCheckWorker(dispatcher)

            reply = await dispatcher.send_request(RequestSpec(method="POST", path="/"), sample_params)

            assert reply.error.status_code == 403
            assert await worker.consume_rain_check("myList") is False

        assert memory_store.pushes == []

    @pytest.mark.asyncio
    async def test_expired_rain_check_not_resent(self, httpx_mock, memory_store, sample_params):
        expired = RequestRainCheck(
            rain_check_params=sample_params,
            expires_at=1,
            retry_after=0,
            request=RequestSpec(method="POST", path="/")
        )
        memory_store.lists["myList"].append(expired.encode())

        async with TransportClient(BASE_URL) as transport:
            worker = RainCheckWorker(RainCheckDispatcher(transport, memory_store))

            assert await worker.consume_rain_check("myList") is True
            assert await worker.consume_rain_check("myList") is False

        assert httpx_mock.get_requests() == []
