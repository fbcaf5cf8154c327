"""Document store fixtures."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from suds_registry.store.change_feed import ChangeFeed
from suds_registry.store.sql_store import SqlDocumentStore


@pytest.fixture
def change_feed() -> ChangeFeed:
    """In-process change feed."""
    return ChangeFeed()


@pytest.fixture
def store(
    session_factory: async_sessionmaker[AsyncSession], change_feed: ChangeFeed
) -> SqlDocumentStore:
    return SqlDocumentStore(session_factory, change_feed=change_feed, namespace="test-app")
