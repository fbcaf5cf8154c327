"""Service layer for maintenance contracts."""

import logging

from suds_registry.schemas.contract import Contract, ContractCreate, ContractUpdate
from suds_registry.services.base import StoreService
from suds_registry.services.errors import DuplicateError, InvalidInputError, NotFoundError
from suds_registry.store.base import DeleteOperation, UpdateOperation, WriteOperation
from suds_registry.store.collections import CONTRACTS, MAINTENANCE_ACTIVITIES

logger = logging.getLogger(__name__)


class ContractService(StoreService):
    """Service for managing contracts.

    Activity records reference contracts by name, so renaming or deleting a
    contract rewrites `involvedContracts` on the affected records in the
    same batch.
    """

    async def list_contracts(self) -> list[Contract]:
        documents = await self.store.get_all(CONTRACTS)
        return sorted((Contract.from_document(d) for d in documents), key=lambda c: c.name.lower())

    async def get_contract(self, contract_id: str) -> Contract:
        document = await self.store.get_one(CONTRACTS, contract_id)
        if document is None:
            raise NotFoundError(f"Contract {contract_id} not found")
        return Contract.from_document(document)

    async def create_contract(self, data: ContractCreate) -> Contract:
        await self._ensure_unique_name(data.name)
        fields = {**data.model_dump(by_alias=True, mode="json"), **self._audit_fields()}
        contract_id = await self.store.create_document(CONTRACTS, fields)
        logger.info(f"Contract created: id={contract_id} name={data.name}")
        return await self.get_contract(contract_id)

    async def update_contract(self, contract_id: str, data: ContractUpdate) -> Contract:
        contract = await self.get_contract(contract_id)

        changes = data.model_dump(by_alias=True, mode="json", exclude_unset=True)
        if not changes:
            raise InvalidInputError("No fields to update")

        operations: list[WriteOperation] = [
            UpdateOperation(CONTRACTS, contract_id, {**changes, **self._audit_fields()})
        ]
        new_name = changes.get("name")
        if new_name is not None and new_name != contract.name:
            await self._ensure_unique_name(new_name)
            operations.extend(await self._rewrite_involved(contract.name, new_name))

        await self.store.execute_batch(operations)
        return await self.get_contract(contract_id)

    async def delete_contract(self, contract_id: str) -> None:
        contract = await self.get_contract(contract_id)
        operations: list[WriteOperation] = [
            DeleteOperation(CONTRACTS, contract_id),
            *await self._rewrite_involved(contract.name, None),
        ]
        await self.store.execute_batch(operations)
        logger.info(f"Contract deleted: id={contract_id} name={contract.name}")

    async def _ensure_unique_name(self, name: str) -> None:
        existing = await self.store.query(CONTRACTS, name=name)
        if existing:
            raise DuplicateError(f"Contract {name!r} already exists")

    async def _rewrite_involved(
        self, old_name: str, new_name: str | None
    ) -> list[UpdateOperation]:
        """Replace (or drop, when new_name is None) a contract name on every record."""
        operations = []
        for record in await self._load_activities():
            if old_name not in record.involved_contracts:
                continue
            contracts = [
                new_name if name == old_name else name
                for name in record.involved_contracts
                if name != old_name or new_name is not None
            ]
            operations.append(
                UpdateOperation(
                    MAINTENANCE_ACTIVITIES,
                    record.id,
                    {"involvedContracts": contracts, **self._audit_fields()},
                )
            )
        return operations
