"""Abstract document store used by every service."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias
from uuid import uuid4


def new_document_id() -> str:
    """Generate an opaque document id."""
    return uuid4().hex


@dataclass(frozen=True)
class StoredDocument:
    """A document as read from a collection."""

    id: str
    fields: dict[str, Any]


@dataclass(frozen=True)
class CreateOperation:
    collection: str
    fields: dict[str, Any]
    document_id: str = field(default_factory=new_document_id)


@dataclass(frozen=True)
class SetOperation:
    collection: str
    document_id: str
    fields: dict[str, Any]
    merge: bool = False


@dataclass(frozen=True)
class UpdateOperation:
    collection: str
    document_id: str
    fields: dict[str, Any]


@dataclass(frozen=True)
class DeleteOperation:
    collection: str
    document_id: str


WriteOperation: TypeAlias = CreateOperation | SetOperation | UpdateOperation | DeleteOperation


class DocumentStore(ABC):
    """Defines the persistence contract: named collections of schemaless documents."""

    @abstractmethod
    async def get_all(self, collection: str) -> list[StoredDocument]:
        """Return a snapshot of every document in a collection."""
        raise NotImplementedError

    @abstractmethod
    async def get_one(self, collection: str, document_id: str) -> StoredDocument | None:
        raise NotImplementedError

    @abstractmethod
    async def query(self, collection: str, **equals: Any) -> list[StoredDocument]:
        """Return documents whose top-level fields equal the given values."""
        raise NotImplementedError

    @abstractmethod
    async def create_document(self, collection: str, fields: dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""
        raise NotImplementedError

    @abstractmethod
    async def update_document(
        self, collection: str, document_id: str, fields: dict[str, Any]
    ) -> None:
        """Merge fields into an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        raise NotImplementedError

    @abstractmethod
    async def set_document(
        self,
        collection: str,
        document_id: str,
        fields: dict[str, Any],
        merge: bool = False,
    ) -> None:
        """Create or overwrite a document (or merge into it when merge=True)."""
        raise NotImplementedError

    @abstractmethod
    async def delete_document(self, collection: str, document_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def execute_batch(self, operations: Sequence[WriteOperation]) -> None:
        """Apply all operations atomically.

        Raises:
            BatchWriteError: If any operation fails; nothing is applied
        """
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, collection: str) -> AsyncIterator[list[StoredDocument]]:
        """Stream the current snapshot, then a new one after each committed change."""
        raise NotImplementedError
