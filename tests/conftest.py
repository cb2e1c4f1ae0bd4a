"""
Module: conftest.py
Description: Shared pytest fixtures for raincheck tests.

Provides test settings, an in-memory list store standing in for Redis,
and sample requests and rain check parameters used across the unit and
integration tests.
"""

import asyncio
from collections import defaultdict, deque
from typing import Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import pytest

from raincheck.config.settings import RainCheckSettings
from raincheck.delivery.dispatcher import RainCheckDispatcher
from raincheck.delivery.worker import RainCheckWorker
from raincheck.models import (
    RainCheckParams,
    RequestError,
    RequestResult,
    RequestSpec,
    SendResult,
)

BASE_URL = "http://localhost:8080"


class InMemoryListStore:
    """List store kept in process memory, recording every push and pop."""

    def __init__(self):
        self.lists: Dict[str, deque] = defaultdict(deque)
        self.pushes: List[Tuple[str, str]] = []
        self.pops: List[str] = []

    async def push_tail(self, list_key: str, value: str) -> None:
        self.pushes.append((list_key, value))
        self.lists[list_key].append(value)

    async def pop_head(self, list_key: str) -> Optional[str]:
        self.pops.append(list_key)
        items = self.lists.get(list_key)
        if not items:
            return None
        return items.popleft()

    def contents(self, list_key: str) -> List[str]:
        return list(self.lists.get(list_key, []))


class HangingListStore:
    """List store whose operations never complete until released."""

    def __init__(self):
        self.release = asyncio.Event()

    async def push_tail(self, list_key: str, value: str) -> None:
        await self.release.wait()

    async def pop_head(self, list_key: str) -> Optional[str]:
        await self.release.wait()
        return None


@pytest.fixture
def test_settings():
    """
    Provide test configuration settings.

    Disables .env loading for predictable tests.
    """
    return RainCheckSettings(
        _env_file=None,
        log_level="DEBUG",
        base_url=BASE_URL,
        store_timeout_ms=500
    )


@pytest.fixture
def memory_store():
    """Provide an empty in-memory list store."""
    return InMemoryListStore()


@pytest.fixture
def hanging_store():
    """Provide a list store that never answers."""
    return HangingListStore()


@pytest.fixture
def sample_request():
    """Provide a typical POST request spec."""
    return RequestSpec(
        method="POST",
        path="/",
        headers={"content-type": "application/json"},
        body='{"id": 123}'
    )


@pytest.fixture
def sample_params():
    """Provide rain check parameters with an immediate retry and a long expiry."""
    return RainCheckParams(
        id="testRequest",
        queue_key="myList",
        rain_check_retry_in_msecs=0,
        expires_in_msecs=9999999
    )


@pytest.fixture
def success_result():
    return SendResult(result=RequestResult(status_code=200, body={"status": "OK"}))


@pytest.fixture
def failure_result():
    return SendResult(error=RequestError(status_code=500, message="HTTP 500"))


@pytest.fixture
def mock_transport(failure_result):
    """Transport double whose sends fail with a 500 unless reconfigured."""
    transport = AsyncMock()
    transport.send_with_retry.return_value = failure_result
    return transport


@pytest.fixture
def dispatcher(mock_transport, memory_store):
    return RainCheckDispatcher(mock_transport, memory_store)


@pytest.fixture
def worker(dispatcher):
    return RainCheckWorker(dispatcher)
