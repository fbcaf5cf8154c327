from functools import lru_cache

from redis.asyncio import Redis

from suds_registry.core.config import get_settings


@lru_cache
def get_redis_client() -> Redis | None:
    """Return the shared Redis client, or None when REDIS_URL is not configured."""
    settings = get_settings()
    if settings.REDIS_URL is None:
        return None
    return Redis.from_url(settings.REDIS_URL.get_secret_value(), decode_responses=True)
