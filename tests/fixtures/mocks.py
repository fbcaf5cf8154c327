"""Mock-related test fixtures."""

from collections.abc import Generator
from typing import Any
from unittest.mock import patch

import pytest
from fakeredis.aioredis import FakeRedis
from pytest_mock import MockerFixture

from suds_registry.core.rate_limit import limiter
from suds_registry.core.redis_client import get_redis_client


@pytest.fixture(autouse=True)
def avoid_external_requests(mocker: MockerFixture) -> None:
    """Block external HTTP requests during tests.

    Note: AsyncClient with ASGITransport doesn't make real HTTP requests,
    so we only block real network calls via HTTPTransport.
    """

    def fail(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("External HTTP communication disabled for tests")

    mocker.patch("httpx._transports.default.AsyncHTTPTransport.handle_async_request", new=fail)
    mocker.patch("httpx._transports.default.HTTPTransport.handle_request", new=fail)


@pytest.fixture(autouse=True)
def patch_redis() -> Generator[Any, Any, Any]:
    """Patch Redis with FakeRedis for testing."""
    with patch(
        "suds_registry.core.redis_client.Redis.from_url",
        return_value=FakeRedis(decode_responses=True),
    ):
        get_redis_client.cache_clear()
        yield
    get_redis_client.cache_clear()


@pytest.fixture(autouse=True)
def clear_rate_limits() -> Generator[None, None, None]:
    """Reset rate limit storage (memory storage) before and after each test."""
    limiter.reset()
    yield
    limiter.reset()
