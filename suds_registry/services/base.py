"""Shared plumbing for services working on the document store."""

from typing import Any

from suds_registry.schemas.activity import MaintenanceActivity
from suds_registry.schemas.base import utc_now
from suds_registry.store.base import DocumentStore, StoredDocument, UpdateOperation
from suds_registry.store.collections import (
    APP_SETTINGS,
    CATEGORIES_DOCUMENT,
    DEFINITIONS_DOCUMENT,
    MAINTENANCE_ACTIVITIES,
)


class StoreService:
    """Base for services; holds the injected store and the acting user."""

    def __init__(self, store: DocumentStore, user_id: str | None = None):
        self.store = store
        self.user_id = user_id

    def _audit_fields(self) -> dict[str, Any]:
        return {"lastUpdatedBy": self.user_id, "timestamp": utc_now().isoformat()}

    async def _load_categories(self) -> list[str]:
        document = await self.store.get_one(APP_SETTINGS, CATEGORIES_DOCUMENT)
        return categories_from_document(document)

    async def _load_definitions(self) -> dict[str, list[str]]:
        document = await self.store.get_one(APP_SETTINGS, DEFINITIONS_DOCUMENT)
        return definitions_from_document(document)

    async def _load_activities(self) -> list[MaintenanceActivity]:
        documents = await self.store.get_all(MAINTENANCE_ACTIVITIES)
        return [MaintenanceActivity.from_document(document) for document in documents]


def categories_from_document(document: StoredDocument | None) -> list[str]:
    if document is None:
        return []
    return [str(name) for name in document.fields.get("categories") or []]


def definitions_from_document(document: StoredDocument | None) -> dict[str, list[str]]:
    if document is None:
        return {}
    return {
        str(category): [str(name) for name in names or []]
        for category, names in document.fields.items()
    }


def unlink_dependents(
    records: list[MaintenanceActivity],
    removed_ids: set[str],
    audit_fields: dict[str, Any],
) -> list[UpdateOperation]:
    """Updates dropping removed ids from the dependents of the remaining records."""
    operations = []
    for record in records:
        if record.id in removed_ids:
            continue
        remaining = [dep for dep in record.dependent_activities if dep not in removed_ids]
        if len(remaining) != len(record.dependent_activities):
            operations.append(
                UpdateOperation(
                    MAINTENANCE_ACTIVITIES,
                    record.id,
                    {"dependentActivities": remaining, **audit_fields},
                )
            )
    return operations
