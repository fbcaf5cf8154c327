"""Document store exceptions."""


class DocumentStoreError(Exception):
    """Base class for failures reported by the document store."""

    pass


class DocumentNotFoundError(DocumentStoreError):
    """Raised when an update targets a document that does not exist."""

    def __init__(self, collection: str, document_id: str):
        super().__init__(f"Document {document_id} not found in {collection}")
        self.collection = collection
        self.document_id = document_id


class WriteRejectedError(DocumentStoreError):
    """Raised when a single document write is refused by the backend."""

    pass


class BatchWriteError(DocumentStoreError):
    """Raised when an atomic batch fails; none of its writes were applied."""

    pass
