"""Document store backed by a single SQL table."""

import logging
from collections.abc import AsyncIterator, Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from suds_registry.db.models.document import Document
from suds_registry.store.base import (
    CreateOperation,
    DeleteOperation,
    DocumentStore,
    SetOperation,
    StoredDocument,
    UpdateOperation,
    WriteOperation,
)
from suds_registry.store.change_feed import ChangeFeed
from suds_registry.store.errors import BatchWriteError, DocumentNotFoundError, WriteRejectedError

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """Stores every collection in the `documents` table.

    Each write call (or batch) runs in its own transaction, so a batch is
    applied all-or-nothing. Subscribers are notified only after commit.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        change_feed: ChangeFeed | None = None,
        namespace: str = "",
    ):
        self.session_factory = session_factory
        self.change_feed = change_feed or ChangeFeed()
        self.namespace = namespace

    def _path(self, collection: str) -> str:
        if not self.namespace:
            return collection
        return f"artifacts/{self.namespace}/public/data/{collection}"

    @staticmethod
    def _to_stored(document: Document) -> StoredDocument:
        return StoredDocument(id=document.id, fields=dict(document.fields or {}))

    async def get_all(self, collection: str) -> list[StoredDocument]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Document)
                .where(Document.collection == self._path(collection))
                .order_by(Document.created_at, Document.id)
            )
            return [self._to_stored(document) for document in result.scalars().all()]

    async def get_one(self, collection: str, document_id: str) -> StoredDocument | None:
        async with self.session_factory() as session:
            document = await session.get(Document, (self._path(collection), document_id))
            return self._to_stored(document) if document is not None else None

    async def query(self, collection: str, **equals: Any) -> list[StoredDocument]:
        # JSON path comparison differs per dialect; collections are small enough to filter here
        documents = await self.get_all(collection)
        return [
            document
            for document in documents
            if all(document.fields.get(name) == value for name, value in equals.items())
        ]

    async def create_document(self, collection: str, fields: dict[str, Any]) -> str:
        operation = CreateOperation(collection=collection, fields=fields)
        await self._write(operation)
        return operation.document_id

    async def update_document(
        self, collection: str, document_id: str, fields: dict[str, Any]
    ) -> None:
        await self._write(UpdateOperation(collection, document_id, fields))

    async def set_document(
        self,
        collection: str,
        document_id: str,
        fields: dict[str, Any],
        merge: bool = False,
    ) -> None:
        await self._write(SetOperation(collection, document_id, fields, merge=merge))

    async def delete_document(self, collection: str, document_id: str) -> None:
        await self._write(DeleteOperation(collection, document_id))

    async def execute_batch(self, operations: Sequence[WriteOperation]) -> None:
        try:
            await self._commit(operations)
        except DocumentNotFoundError as exc:
            logger.warning(f"Batch rejected: reason=missing_document error={exc}")
            raise BatchWriteError(f"Batch rejected: {exc}") from exc
        except SQLAlchemyError as exc:
            logger.warning(f"Batch rejected: reason=database_error error={exc}")
            raise BatchWriteError("Batch rejected by the database") from exc

    async def subscribe(self, collection: str) -> AsyncIterator[list[StoredDocument]]:
        async with self.change_feed.listen(collection) as changes:
            yield await self.get_all(collection)
            async for _ in changes:
                yield await self.get_all(collection)

    async def _write(self, operation: WriteOperation) -> None:
        try:
            await self._commit([operation])
        except SQLAlchemyError as exc:
            logger.warning(
                f"Write rejected: collection={operation.collection} "
                f"document_id={getattr(operation, 'document_id', None)} error={exc}"
            )
            raise WriteRejectedError(f"Write to {operation.collection} was rejected") from exc

    async def _commit(self, operations: Sequence[WriteOperation]) -> None:
        if not operations:
            return

        async with self.session_factory() as session:
            async with session.begin():
                for operation in operations:
                    await self._apply(session, operation)

        for collection in dict.fromkeys(operation.collection for operation in operations):
            await self.change_feed.publish(collection)

    async def _apply(self, session: AsyncSession, operation: WriteOperation) -> None:
        path = self._path(operation.collection)
        now = datetime.now(timezone.utc)

        if isinstance(operation, CreateOperation):
            session.add(
                Document(
                    collection=path,
                    id=operation.document_id,
                    fields=dict(operation.fields),
                    created_at=now,
                    updated_at=now,
                )
            )
            # Later operations in the same batch must see this document
            await session.flush()
            return

        existing = await session.get(Document, (path, operation.document_id))

        if isinstance(operation, DeleteOperation):
            if existing is not None:
                await session.delete(existing)
                await session.flush()
            return

        if isinstance(operation, UpdateOperation):
            if existing is None:
                raise DocumentNotFoundError(operation.collection, operation.document_id)
            existing.fields = {**existing.fields, **operation.fields}
            existing.updated_at = now
            await session.flush()
            return

        if existing is None:
            session.add(
                Document(
                    collection=path,
                    id=operation.document_id,
                    fields=dict(operation.fields),
                    created_at=now,
                    updated_at=now,
                )
            )
        elif operation.merge:
            existing.fields = {**existing.fields, **operation.fields}
            existing.updated_at = now
        else:
            existing.fields = dict(operation.fields)
            existing.updated_at = now
        await session.flush()
