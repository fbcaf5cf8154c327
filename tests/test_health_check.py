"""Tests for health check endpoint."""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient


async def test_health_check_basic(client: AsyncClient):
    response = await client.get("/health_check")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "test"


async def test_health_check_with_db(client: AsyncClient):
    response = await client.get("/health_check?check_db=true")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


async def test_health_check_with_redis(client: AsyncClient):
    """Redis is checked via PING when REDIS_URL is configured."""
    response = await client.get("/health_check?check_redis=true")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["redis"] == "connected"


async def test_health_check_redis_not_configured(client: AsyncClient):
    with patch("suds_registry.core.redis_client.get_redis_client", return_value=None):
        response = await client.get("/health_check?check_redis=true")

    data = response.json()
    assert data["status"] == "healthy"
    assert data["redis"] == "not_configured"


async def test_health_check_redis_failure(client: AsyncClient):
    """Test health check detects Redis connection failure."""
    with patch("suds_registry.core.redis_client.get_redis_client") as mock_redis:
        mock_redis.return_value.ping = AsyncMock(side_effect=Exception("Connection refused"))

        response = await client.get("/health_check?check_redis=true")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["redis"] == "disconnected"
        assert "error" in data


async def test_health_check_db_failure(client: AsyncClient):
    """Test health check detects database failure."""
    with patch("suds_registry.main.get_async_sessionmaker") as mock_session:
        mock_session.return_value.return_value.__aenter__.return_value.execute = AsyncMock(
            side_effect=Exception("Database connection failed")
        )

        response = await client.get("/health_check?check_db=true")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["database"] == "disconnected"
