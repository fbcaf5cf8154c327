"""WebSocket subscription tests.

These run through Starlette's TestClient, which drives the app on its own
event loop, so the store uses a file database opened per connection.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from starlette.websockets import WebSocketDisconnect

from suds_registry.core.dependencies import get_store
from suds_registry.db import models  # noqa: F401
from suds_registry.db.session import Base
from suds_registry.main import app
from suds_registry.store.sql_store import SqlDocumentStore


@pytest.fixture
def ws_client(tmp_path: Path) -> Generator[TestClient, None, None]:
    database = tmp_path / "subscriptions.db"
    sync_engine = create_engine(f"sqlite:///{database}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{database}", poolclass=NullPool)
    store = SqlDocumentStore(
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
        namespace="test-app",
    )
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def test_subscription_sends_snapshot_then_changes(
    ws_client: TestClient, editor_headers: dict[str, str]
):
    with ws_client.websocket_connect("/api/subscriptions/contracts") as websocket:
        assert websocket.receive_json() == {"collection": "contracts", "documents": []}

        response = ws_client.post(
            "/api/contracts",
            json={"name": "Zonas verdes", "summary": "Mantenimiento", "responsible": "Ana"},
            headers=editor_headers,
        )
        assert response.status_code == 201

        snapshot = websocket.receive_json()
        assert snapshot["collection"] == "contracts"
        assert [(d["id"], d["name"]) for d in snapshot["documents"]] == [
            (response.json()["id"], "Zonas verdes")
        ]


def test_unknown_collection_is_refused(ws_client: TestClient):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with ws_client.websocket_connect("/api/subscriptions/users") as websocket:
            websocket.receive_json()

    assert exc_info.value.code == 1008


def test_subscription_failure_closes_with_internal_error(
    ws_client: TestClient, mocker: MockerFixture
):
    async def failing_subscribe(self: SqlDocumentStore, collection: str):
        raise SQLAlchemyError("database unavailable")
        yield

    mocker.patch.object(SqlDocumentStore, "subscribe", failing_subscribe)

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with ws_client.websocket_connect("/api/subscriptions/contracts") as websocket:
            websocket.receive_json()

    assert exc_info.value.code == 1011
