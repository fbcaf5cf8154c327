import logging
from collections.abc import Awaitable
from typing import cast

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text

from suds_registry.api import (
    activities,
    activity_definitions,
    categories,
    contracts,
    subscriptions,
    suds_types,
)
from suds_registry.core import redis_client
from suds_registry.core.config import get_settings
from suds_registry.core.error_handlers import register_error_handlers
from suds_registry.core.lifespan import lifespan
from suds_registry.core.logging_config import LoggingMiddleware
from suds_registry.core.rate_limit import limiter
from suds_registry.db.session import get_async_sessionmaker
from suds_registry.version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SUDS Maintenance Registry API",
    description="Maintenance activities for sustainable urban drainage systems",
    version=__version__,
    debug=get_settings().LOG_LEVEL == "DEBUG",
    openapi_url="/api/v1/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_error_handlers(app)

app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)

app.include_router(suds_types.router)
app.include_router(contracts.router)
app.include_router(categories.router)
app.include_router(activity_definitions.router)
app.include_router(activities.router)
app.include_router(subscriptions.router)


@app.get("/health_check")
@limiter.exempt
async def health_check(
    check_db: bool = False,
    check_redis: bool = False,
) -> dict[str, str | bool]:
    """Health check endpoint to verify API is running.

    Args:
        check_db: If True, also checks database connectivity
        check_redis: If True, checks Redis connectivity ("not_configured" without REDIS_URL)
    """
    settings = get_settings()
    result: dict[str, str | bool] = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
    }

    if check_db:
        session_factory = get_async_sessionmaker()

        try:
            async with session_factory() as session:
                await session.execute(text("SELECT 1"))
                result["database"] = "connected"
        except Exception as e:
            result["status"] = "unhealthy"
            result["database"] = "disconnected"
            result["error"] = str(e)

    if check_redis:
        client = redis_client.get_redis_client()
        if client is None:
            result["redis"] = "not_configured"
        else:
            try:
                await cast(Awaitable[bool], client.ping())
                result["redis"] = "connected"
            except Exception as e:
                result["status"] = "unhealthy"
                result["redis"] = "disconnected"
                if "error" not in result:
                    result["error"] = str(e)

    return result
