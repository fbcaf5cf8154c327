"""Service layer for SUDS installation types."""

import logging
from collections.abc import Collection

from suds_registry.schemas.suds_type import LocationTag, SudsType, SudsTypeCreate, SudsTypeUpdate
from suds_registry.services.base import StoreService, unlink_dependents
from suds_registry.services.errors import InvalidInputError, NotFoundError
from suds_registry.services.reorder_service import with_provisional_order
from suds_registry.store.base import DeleteOperation, WriteOperation
from suds_registry.store.collections import MAINTENANCE_ACTIVITIES, SUDS_TYPES

logger = logging.getLogger(__name__)


class SudsTypeService(StoreService):
    """Service for managing SUDS installation types."""

    async def list_suds_types(
        self,
        location_filter: Collection[LocationTag] | None = None,
    ) -> list[SudsType]:
        """List SUDS types in display order, optionally keeping those with any of the given tags."""
        documents = await self.store.get_all(SUDS_TYPES)
        suds_types = with_provisional_order(SudsType.from_document(d) for d in documents)

        if location_filter:
            wanted = set(location_filter)
            suds_types = [s for s in suds_types if wanted.intersection(s.location_types)]

        return suds_types

    async def get_suds_type(self, suds_type_id: str) -> SudsType:
        document = await self.store.get_one(SUDS_TYPES, suds_type_id)
        if document is None:
            raise NotFoundError(f"SUDS type {suds_type_id} not found")
        return SudsType.from_document(document)

    async def create_suds_type(self, data: SudsTypeCreate) -> SudsType:
        # `order` is left unset; readers assign a provisional one until the first move
        fields = {**data.model_dump(by_alias=True, mode="json"), **self._audit_fields()}
        suds_type_id = await self.store.create_document(SUDS_TYPES, fields)
        logger.info(f"SUDS type created: id={suds_type_id} name={data.name}")
        return await self.get_suds_type(suds_type_id)

    async def update_suds_type(self, suds_type_id: str, data: SudsTypeUpdate) -> SudsType:
        await self.get_suds_type(suds_type_id)

        changes = data.model_dump(by_alias=True, mode="json", exclude_unset=True)
        if not changes:
            raise InvalidInputError("No fields to update")

        await self.store.update_document(SUDS_TYPES, suds_type_id, {**changes, **self._audit_fields()})
        return await self.get_suds_type(suds_type_id)

    async def delete_suds_type(self, suds_type_id: str) -> None:
        """Delete a SUDS type together with all of its activity records."""
        await self.get_suds_type(suds_type_id)

        records = await self._load_activities()
        removed_ids = {record.id for record in records if record.suds_type_id == suds_type_id}

        operations: list[WriteOperation] = [
            DeleteOperation(SUDS_TYPES, suds_type_id),
            *(DeleteOperation(MAINTENANCE_ACTIVITIES, record_id) for record_id in removed_ids),
            *unlink_dependents(records, removed_ids, self._audit_fields()),
        ]
        await self.store.execute_batch(operations)
        logger.info(f"SUDS type deleted: id={suds_type_id} removed_records={len(removed_ids)}")
