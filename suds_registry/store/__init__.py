"""Document store: named collections of schemaless documents."""

from .base import (
    CreateOperation,
    DeleteOperation,
    DocumentStore,
    SetOperation,
    StoredDocument,
    UpdateOperation,
    WriteOperation,
    new_document_id,
)
from .change_feed import ChangeFeed
from .errors import BatchWriteError, DocumentNotFoundError, DocumentStoreError, WriteRejectedError
from .sql_store import SqlDocumentStore

__all__ = [
    "BatchWriteError",
    "ChangeFeed",
    "CreateOperation",
    "DeleteOperation",
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentStoreError",
    "SetOperation",
    "SqlDocumentStore",
    "StoredDocument",
    "UpdateOperation",
    "WriteOperation",
    "WriteRejectedError",
    "new_document_id",
]
