"""Service layer for maintenance activity records."""

import logging
from collections.abc import Iterable
from typing import Any

from suds_registry.schemas.activity import (
    ActivityDetailUpdate,
    CatalogEntry,
    DependenciesUpdate,
    MaintenanceActivity,
    ValidationStatus,
    ValidationUpdate,
)
from suds_registry.schemas.base import utc_now
from suds_registry.schemas.suds_type import SudsType
from suds_registry.services.activity_graph import (
    CATALOG_ID_SEPARATOR,
    DisplayEntry,
    build_flat_activity_catalog,
    parse_catalog_id,
    resolve_display_order,
)
from suds_registry.services.base import StoreService, unlink_dependents
from suds_registry.services.errors import InvalidInputError, NotFoundError
from suds_registry.services.reorder_service import with_provisional_order
from suds_registry.store.base import (
    CreateOperation,
    UpdateOperation,
    WriteOperation,
    new_document_id,
)
from suds_registry.store.collections import MAINTENANCE_ACTIVITIES, SUDS_TYPES

logger = logging.getLogger(__name__)


class ActivityService(StoreService):
    """Applicability, details, validation and dependencies of activity records."""

    async def list_activities(self, suds_type_id: str | None = None) -> list[MaintenanceActivity]:
        records = await self._load_activities()
        if suds_type_id is None:
            return records
        return [record for record in records if record.suds_type_id == suds_type_id]

    async def get_activity(self, activity_id: str) -> MaintenanceActivity:
        document = await self.store.get_one(MAINTENANCE_ACTIVITIES, activity_id)
        if document is None:
            raise NotFoundError(f"Activity {activity_id} not found")
        return MaintenanceActivity.from_document(document)

    async def find_activity(
        self, suds_type_id: str, category: str, activity_name: str
    ) -> MaintenanceActivity | None:
        documents = await self.store.query(
            MAINTENANCE_ACTIVITIES,
            sudsTypeId=suds_type_id,
            category=category,
            activityName=activity_name,
        )
        return MaintenanceActivity.from_document(documents[0]) if documents else None

    async def toggle_applies(
        self, suds_type_id: str, category: str, activity_name: str
    ) -> MaintenanceActivity:
        """Flip whether an activity applies to a SUDS type, creating the record on first use.

        A record that stops applying is also removed from the dependents of
        every other record, in the same batch.
        """
        await self._ensure_suds_type(suds_type_id)

        existing = await self.find_activity(suds_type_id, category, activity_name)
        if existing is None:
            self._check_defined(category, activity_name, await self._defined_activities())
            activity_id = await self.store.create_document(
                MAINTENANCE_ACTIVITIES,
                self._new_record_fields(suds_type_id, category, activity_name),
            )
            logger.info(
                f"Activity record created: id={activity_id} suds_type_id={suds_type_id} "
                f"category={category} activity={activity_name}"
            )
            return await self.get_activity(activity_id)

        applies = not existing.applies
        audit = self._audit_fields()
        operations: list[WriteOperation] = [
            UpdateOperation(MAINTENANCE_ACTIVITIES, existing.id, {"applies": applies, **audit})
        ]
        if not applies:
            operations.extend(unlink_dependents(await self._load_activities(), {existing.id}, audit))

        await self.store.execute_batch(operations)
        return await self.get_activity(existing.id)

    async def update_detail(
        self, activity_id: str, update: ActivityDetailUpdate
    ) -> MaintenanceActivity:
        """Change status, comment, frequency or contracts; validation goes back to pending."""
        await self.get_activity(activity_id)

        changes = update.model_dump(by_alias=True, mode="json", exclude_unset=True, exclude_none=True)
        if not changes:
            raise InvalidInputError("No fields to update")
        if "involvedContracts" in changes:
            changes["involvedContracts"] = list(dict.fromkeys(changes["involvedContracts"]))

        await self.store.update_document(
            MAINTENANCE_ACTIVITIES,
            activity_id,
            {
                **changes,
                **self._audit_fields(),
                "validationStatus": ValidationStatus.PENDING.value,
            },
        )
        return await self.get_activity(activity_id)

    async def validate(self, activity_id: str, update: ValidationUpdate) -> MaintenanceActivity:
        await self.get_activity(activity_id)
        await self.store.update_document(
            MAINTENANCE_ACTIVITIES,
            activity_id,
            {
                "validationStatus": update.validation_status.value,
                "validatorComment": update.validator_comment,
                "validatedBy": self.user_id or "",
                "validationTimestamp": utc_now().isoformat(),
            },
        )
        logger.info(
            f"Activity validated: id={activity_id} status={update.validation_status.value} "
            f"validator={self.user_id}"
        )
        return await self.get_activity(activity_id)

    async def save_dependencies(self, update: DependenciesUpdate) -> MaintenanceActivity:
        """Replace the dependents of an activity in one batch.

        The activity record is created (applying) if it does not exist yet.
        Every selected dependent is forced to apply: existing records are
        switched on, and catalog ids without a record get a new applying record.
        Dependents must belong to the same SUDS type.
        """
        await self._ensure_suds_type(update.suds_type_id)

        records = await self._load_activities()
        by_id = {record.id: record for record in records}
        by_key = {record.key: record for record in records}
        primary_key = (update.suds_type_id, update.category, update.activity_name)
        primary = by_key.get(primary_key)
        defined = await self._defined_activities()
        if primary is None:
            self._check_defined(update.category, update.activity_name, defined)

        primary_id = primary.id if primary is not None else new_document_id()

        audit = self._audit_fields()
        operations: list[WriteOperation] = []
        created: dict[tuple[str, str, str], str] = {}
        dependent_ids: list[str] = []

        for selected in dict.fromkeys(update.dependent_activities):
            record = by_id.get(selected)
            if record is None and CATALOG_ID_SEPARATOR in selected:
                key = self._parse_selection(selected)
                if key == primary_key:
                    continue
                self._check_same_suds_type(key[0], update.suds_type_id, selected)
                record = by_key.get(key)
                if record is None:
                    if key not in created:
                        self._check_defined(key[1], key[2], defined)
                        operation = CreateOperation(
                            MAINTENANCE_ACTIVITIES, self._new_record_fields(*key)
                        )
                        operations.append(operation)
                        created[key] = operation.document_id
                        dependent_ids.append(operation.document_id)
                    continue

            if record is None:
                raise InvalidInputError(f"Unknown activity {selected!r}")
            if record.id == primary_id or record.id in dependent_ids:
                continue
            self._check_same_suds_type(record.suds_type_id, update.suds_type_id, selected)

            if not record.applies:
                operations.append(
                    UpdateOperation(MAINTENANCE_ACTIVITIES, record.id, {"applies": True, **audit})
                )
            dependent_ids.append(record.id)

        primary_operation: WriteOperation
        if primary is None:
            primary_operation = CreateOperation(
                MAINTENANCE_ACTIVITIES,
                self._new_record_fields(*primary_key, dependent_activities=dependent_ids),
                document_id=primary_id,
            )
        else:
            primary_operation = UpdateOperation(
                MAINTENANCE_ACTIVITIES,
                primary_id,
                {"dependentActivities": dependent_ids, **audit},
            )

        await self.store.execute_batch([primary_operation, *operations])
        logger.info(
            f"Activity dependencies saved: id={primary_id} dependents={len(dependent_ids)} "
            f"created={len(created)}"
        )
        return await self.get_activity(primary_id)

    async def display_order(self, suds_type_id: str) -> list[DisplayEntry]:
        """Applicable activities of a SUDS type, each followed by its dependents."""
        await self._ensure_suds_type(suds_type_id)
        return resolve_display_order(
            suds_type_id,
            await self._load_activities(),
            await self._load_categories(),
            await self._load_definitions(),
        )

    async def build_catalog(self) -> list[CatalogEntry]:
        documents = await self.store.get_all(SUDS_TYPES)
        return build_flat_activity_catalog(
            with_provisional_order(SudsType.from_document(d) for d in documents),
            await self._load_categories(),
            await self._load_definitions(),
        )

    async def list_for_contract(self, contract_name: str) -> list[MaintenanceActivity]:
        """Applicable records that involve the given contract."""
        return [
            record
            for record in await self._load_activities()
            if record.applies and contract_name in record.involved_contracts
        ]

    async def _ensure_suds_type(self, suds_type_id: str) -> None:
        if await self.store.get_one(SUDS_TYPES, suds_type_id) is None:
            raise NotFoundError(f"SUDS type {suds_type_id} not found")

    async def _defined_activities(self) -> set[tuple[str, str]]:
        definitions = await self._load_definitions()
        return {
            (category, activity_name)
            for category in await self._load_categories()
            for activity_name in definitions.get(category, [])
        }

    @staticmethod
    def _check_defined(category: str, activity_name: str, defined: set[tuple[str, str]]) -> None:
        if (category, activity_name) not in defined:
            raise InvalidInputError(
                f"Activity {activity_name!r} is not defined in category {category!r}"
            )

    def _new_record_fields(
        self,
        suds_type_id: str,
        category: str,
        activity_name: str,
        dependent_activities: Iterable[str] = (),
    ) -> dict[str, Any]:
        record = MaintenanceActivity(
            id="",
            suds_type_id=suds_type_id,
            category=category,
            activity_name=activity_name,
            applies=True,
            dependent_activities=list(dependent_activities),
        )
        return {**record.to_fields(), **self._audit_fields()}

    @staticmethod
    def _parse_selection(selected: str) -> tuple[str, str, str]:
        try:
            return parse_catalog_id(selected)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e

    @staticmethod
    def _check_same_suds_type(dependent_suds_type_id: str, suds_type_id: str, selected: str) -> None:
        if dependent_suds_type_id != suds_type_id:
            raise InvalidInputError(
                f"Activity {selected!r} belongs to another SUDS type and cannot be a dependent"
            )
