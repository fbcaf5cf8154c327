from suds_registry.db.models.document import Document

__all__ = ["Document"]
