"""Tests for the SQL-backed document store."""

import asyncio

import pytest
from pytest_mock import MockerFixture
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from suds_registry.store.base import CreateOperation, DeleteOperation, SetOperation, UpdateOperation
from suds_registry.store.change_feed import ChangeFeed
from suds_registry.store.errors import BatchWriteError, DocumentNotFoundError, WriteRejectedError
from suds_registry.store.sql_store import SqlDocumentStore


async def test_create_and_get_document(store: SqlDocumentStore):
    document_id = await store.create_document("contracts", {"name": "Parques"})

    document = await store.get_one("contracts", document_id)

    assert document is not None
    assert document.id == document_id
    assert document.fields == {"name": "Parques"}


async def test_get_missing_document_returns_none(store: SqlDocumentStore):
    assert await store.get_one("contracts", "missing") is None


async def test_get_all_returns_documents_in_creation_order(store: SqlDocumentStore):
    ids = [await store.create_document("contracts", {"name": name}) for name in ("A", "B", "C")]

    documents = await store.get_all("contracts")

    assert [document.id for document in documents] == ids


async def test_collections_are_isolated_by_namespace(
    store: SqlDocumentStore, session_factory: async_sessionmaker[AsyncSession]
):
    other = SqlDocumentStore(session_factory, namespace="other-app")
    await store.create_document("contracts", {"name": "Parques"})

    assert await other.get_all("contracts") == []
    assert len(await store.get_all("contracts")) == 1


async def test_update_merges_fields(store: SqlDocumentStore):
    document_id = await store.create_document("contracts", {"name": "Parques", "summary": "old"})

    await store.update_document("contracts", document_id, {"summary": "new"})

    document = await store.get_one("contracts", document_id)
    assert document.fields == {"name": "Parques", "summary": "new"}


async def test_update_missing_document_raises(store: SqlDocumentStore):
    with pytest.raises(DocumentNotFoundError):
        await store.update_document("contracts", "missing", {"name": "x"})


async def test_set_document_replaces_or_merges(store: SqlDocumentStore):
    await store.set_document("appSettings", "maintenanceCategories", {"categories": ["A"], "x": 1})
    await store.set_document("appSettings", "maintenanceCategories", {"categories": ["B"]})
    replaced = await store.get_one("appSettings", "maintenanceCategories")

    await store.set_document("appSettings", "maintenanceCategories", {"y": 2}, merge=True)
    merged = await store.get_one("appSettings", "maintenanceCategories")

    assert replaced.fields == {"categories": ["B"]}
    assert merged.fields == {"categories": ["B"], "y": 2}


async def test_delete_document(store: SqlDocumentStore):
    document_id = await store.create_document("contracts", {"name": "Parques"})

    await store.delete_document("contracts", document_id)
    await store.delete_document("contracts", document_id)

    assert await store.get_one("contracts", document_id) is None


async def test_query_matches_all_given_fields(store: SqlDocumentStore):
    await store.create_document("maintenanceActivities", {"sudsTypeId": "a", "category": "Limpieza"})
    match = await store.create_document(
        "maintenanceActivities", {"sudsTypeId": "a", "category": "Vegetación"}
    )
    await store.create_document("maintenanceActivities", {"sudsTypeId": "b", "category": "Vegetación"})

    documents = await store.query("maintenanceActivities", sudsTypeId="a", category="Vegetación")

    assert [document.id for document in documents] == [match]


async def test_batch_applies_every_operation(store: SqlDocumentStore):
    existing = await store.create_document("contracts", {"name": "Old"})
    create = CreateOperation("contracts", {"name": "New"})

    await store.execute_batch(
        [
            create,
            UpdateOperation("contracts", create.document_id, {"summary": "added in same batch"}),
            DeleteOperation("contracts", existing),
            SetOperation("appSettings", "maintenanceCategories", {"categories": ["A"]}),
        ]
    )

    assert await store.get_one("contracts", existing) is None
    created = await store.get_one("contracts", create.document_id)
    assert created.fields == {"name": "New", "summary": "added in same batch"}
    assert await store.get_one("appSettings", "maintenanceCategories") is not None


async def test_failed_batch_applies_nothing(store: SqlDocumentStore):
    existing = await store.create_document("contracts", {"name": "Old"})

    with pytest.raises(BatchWriteError):
        await store.execute_batch(
            [
                CreateOperation("contracts", {"name": "New"}),
                UpdateOperation("contracts", existing, {"name": "Renamed"}),
                UpdateOperation("contracts", "missing", {"name": "x"}),
            ]
        )

    documents = await store.get_all("contracts")
    assert [document.fields["name"] for document in documents] == ["Old"]


async def test_empty_batch_is_a_no_op(store: SqlDocumentStore, change_feed: ChangeFeed):
    async with change_feed.listen("contracts") as changes:
        await store.execute_batch([])

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(anext(changes), timeout=0.05)


async def test_database_error_is_reported_as_rejected_write(
    store: SqlDocumentStore, mocker: MockerFixture
):
    mocker.patch.object(
        store, "_apply", side_effect=OperationalError("INSERT", {}, Exception("database is locked"))
    )

    with pytest.raises(WriteRejectedError):
        await store.create_document("contracts", {"name": "Parques"})

    with pytest.raises(BatchWriteError):
        await store.execute_batch([CreateOperation("contracts", {"name": "Parques"})])


async def test_committed_write_notifies_each_touched_collection_once(
    store: SqlDocumentStore, change_feed: ChangeFeed
):
    async with change_feed.listen("contracts") as changes:
        await store.execute_batch(
            [
                CreateOperation("contracts", {"name": "A"}),
                CreateOperation("contracts", {"name": "B"}),
            ]
        )

        assert await asyncio.wait_for(anext(changes), timeout=1) == "contracts"
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(anext(changes), timeout=0.05)


async def test_failed_batch_does_not_notify(store: SqlDocumentStore, change_feed: ChangeFeed):
    async with change_feed.listen("contracts") as changes:
        with pytest.raises(BatchWriteError):
            await store.execute_batch([UpdateOperation("contracts", "missing", {"name": "x"})])

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(anext(changes), timeout=0.05)


async def test_subscribe_streams_snapshot_after_each_change(
    store: SqlDocumentStore, change_feed: ChangeFeed
):
    subscription = store.subscribe("contracts")

    assert await anext(subscription) == []

    await store.create_document("contracts", {"name": "Parques"})
    snapshot = await asyncio.wait_for(anext(subscription), timeout=1)
    assert [document.fields["name"] for document in snapshot] == ["Parques"]

    await subscription.aclose()
    assert change_feed.listener_count("contracts") == 0
