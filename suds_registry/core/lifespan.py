import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from suds_registry.core.config import get_settings
from suds_registry.core.logging_config import configure_logging
from suds_registry.core.redis_client import get_redis_client
from suds_registry.db.session import Base, get_async_sessionmaker, get_engine
from suds_registry.store.change_feed import ChangeFeed
from suds_registry.store.sql_store import SqlDocumentStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if settings.ENVIRONMENT != "production":
        # Production schema is managed by alembic
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    redis_client = get_redis_client()
    change_feed = ChangeFeed(redis_client, channel_prefix=settings.CHANGE_FEED_PREFIX)
    app.state.store = SqlDocumentStore(
        get_async_sessionmaker(),
        change_feed=change_feed,
        namespace=settings.APP_ID,
    )
    logger.info(
        f"Application started: environment={settings.ENVIRONMENT} "
        f"app_id={settings.APP_ID} distributed_changes={change_feed.distributed}"
    )

    yield

    if redis_client is not None:
        await redis_client.aclose()
    await get_engine().dispose()
    logger.info("Application stopped")
