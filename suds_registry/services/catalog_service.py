"""Service layer for maintenance categories and activity definitions."""

import logging

from suds_registry.schemas.activity import MaintenanceActivity
from suds_registry.services.activity_graph import CATALOG_ID_SEPARATOR
from suds_registry.services.base import StoreService, unlink_dependents
from suds_registry.services.errors import DuplicateError, InvalidInputError, NotFoundError
from suds_registry.store.base import DeleteOperation, SetOperation, UpdateOperation, WriteOperation
from suds_registry.store.collections import (
    APP_SETTINGS,
    CATEGORIES_DOCUMENT,
    DEFINITIONS_DOCUMENT,
    MAINTENANCE_ACTIVITIES,
)

logger = logging.getLogger(__name__)


def to_sentence_case(value: str) -> str:
    """Trim and sentence-case an activity name ("cLEAN drain " -> "Clean drain")."""
    trimmed = value.strip()
    return trimmed[:1].upper() + trimmed[1:].lower()


def _validate_name(value: str, kind: str) -> str:
    if not value:
        raise InvalidInputError(f"{kind} name must not be empty")
    if CATALOG_ID_SEPARATOR in value:
        raise InvalidInputError(f"{kind} name must not contain {CATALOG_ID_SEPARATOR!r}")
    return value


class CatalogService(StoreService):
    """Manages the ordered category list and the per-category activity names.

    Removing or renaming a definition updates the matching activity records
    in the same batch as the settings document, so no record is left pointing
    at a definition that no longer exists.
    """

    async def get_categories(self) -> list[str]:
        return await self._load_categories()

    async def get_definitions(self) -> dict[str, list[str]]:
        return await self._load_definitions()

    async def add_category(self, name: str) -> list[str]:
        """Append a category to the ordered list."""
        category = _validate_name(name.strip(), "Category")
        categories = await self._load_categories()
        if category in categories:
            raise DuplicateError(f"Category {category!r} already exists")

        updated = [*categories, category]
        await self.store.set_document(APP_SETTINGS, CATEGORIES_DOCUMENT, {"categories": updated})
        logger.info(f"Category added: category={category}")
        return updated

    async def delete_category(self, name: str) -> None:
        """Remove a category with its definitions and all its activity records."""
        categories = await self._load_categories()
        if name not in categories:
            raise NotFoundError(f"Category {name!r} not found")

        definitions = await self._load_definitions()
        definitions.pop(name, None)
        records = await self._load_activities()
        removed_ids = {record.id for record in records if record.category == name}

        operations: list[WriteOperation] = [
            SetOperation(
                APP_SETTINGS,
                CATEGORIES_DOCUMENT,
                {"categories": [category for category in categories if category != name]},
            ),
            SetOperation(APP_SETTINGS, DEFINITIONS_DOCUMENT, definitions),
            *(DeleteOperation(MAINTENANCE_ACTIVITIES, record_id) for record_id in removed_ids),
            *unlink_dependents(records, removed_ids, self._audit_fields()),
        ]
        await self.store.execute_batch(operations)
        logger.info(f"Category deleted: category={name} removed_records={len(removed_ids)}")

    async def add_activity_definition(self, category: str, name: str) -> str:
        """Append an activity name to a category; returns the normalized name."""
        activity_name = _validate_name(to_sentence_case(name), "Activity")
        if category not in await self._load_categories():
            raise NotFoundError(f"Category {category!r} not found")

        definitions = await self._load_definitions()
        names = definitions.get(category, [])
        if activity_name in {to_sentence_case(existing) for existing in names}:
            raise DuplicateError(
                f"Activity {activity_name!r} already exists in category {category!r}"
            )

        definitions[category] = [*names, activity_name]
        await self.store.set_document(APP_SETTINGS, DEFINITIONS_DOCUMENT, definitions)
        return activity_name

    async def rename_activity_definition(self, category: str, current_name: str, new_name: str) -> str:
        """Rename a definition and every activity record that uses it."""
        definitions = await self._load_definitions()
        names = definitions.get(category, [])
        if current_name not in names:
            raise NotFoundError(f"Activity {current_name!r} not found in category {category!r}")

        renamed = _validate_name(to_sentence_case(new_name), "Activity")
        if renamed == current_name:
            return current_name
        others = {to_sentence_case(existing) for existing in names if existing != current_name}
        if renamed in others:
            raise DuplicateError(f"Activity {renamed!r} already exists in category {category!r}")

        definitions[category] = [renamed if name == current_name else name for name in names]
        records = self._matching(await self._load_activities(), category, current_name)

        operations: list[WriteOperation] = [
            SetOperation(APP_SETTINGS, DEFINITIONS_DOCUMENT, definitions),
            *(
                UpdateOperation(
                    MAINTENANCE_ACTIVITIES,
                    record.id,
                    {"activityName": renamed, **self._audit_fields()},
                )
                for record in records
            ),
        ]
        await self.store.execute_batch(operations)
        logger.info(
            f"Activity renamed: category={category} from={current_name} to={renamed} "
            f"records={len(records)}"
        )
        return renamed

    async def delete_activity_definition(self, category: str, name: str) -> None:
        """Remove a definition and every activity record that uses it."""
        definitions = await self._load_definitions()
        names = definitions.get(category, [])
        if name not in names:
            raise NotFoundError(f"Activity {name!r} not found in category {category!r}")

        definitions[category] = [existing for existing in names if existing != name]
        all_records = await self._load_activities()
        removed_ids = {record.id for record in self._matching(all_records, category, name)}

        operations: list[WriteOperation] = [
            SetOperation(APP_SETTINGS, DEFINITIONS_DOCUMENT, definitions),
            *(DeleteOperation(MAINTENANCE_ACTIVITIES, record_id) for record_id in removed_ids),
            *unlink_dependents(all_records, removed_ids, self._audit_fields()),
        ]
        await self.store.execute_batch(operations)
        logger.info(
            f"Activity deleted: category={category} activity={name} records={len(removed_ids)}"
        )

    @staticmethod
    def _matching(
        records: list[MaintenanceActivity], category: str, activity_name: str
    ) -> list[MaintenanceActivity]:
        return [
            record
            for record in records
            if record.category == category and record.activity_name == activity_name
        ]
