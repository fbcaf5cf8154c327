"""API endpoints for maintenance contracts."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from suds_registry.core.capabilities import EditScope
from suds_registry.core.dependencies import (
    CurrentUser,
    get_current_user,
    get_store,
    require_capability,
)
from suds_registry.schemas.activity import MaintenanceActivityList
from suds_registry.schemas.contract import Contract, ContractCreate, ContractList, ContractUpdate
from suds_registry.services.activity_service import ActivityService
from suds_registry.services.contract_service import ContractService
from suds_registry.store.base import DocumentStore

router = APIRouter(prefix="/api/contracts", tags=["contracts"])

can_edit_contracts = require_capability(EditScope.CONTRACTS)


@router.get("", response_model=ContractList)
async def list_contracts(
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ContractList:
    contracts = await ContractService(store).list_contracts()
    return ContractList(contracts=contracts, total=len(contracts))


@router.post("", response_model=Contract, status_code=status.HTTP_201_CREATED)
async def create_contract(
    data: ContractCreate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_contracts)],
) -> Contract:
    return await ContractService(store, user.user_id).create_contract(data)


@router.get("/{contract_id}", response_model=Contract)
async def get_contract(
    contract_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Contract:
    return await ContractService(store).get_contract(contract_id)


@router.get("/{contract_id}/activities", response_model=MaintenanceActivityList)
async def list_contract_activities(
    contract_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MaintenanceActivityList:
    """Applicable activities that involve this contract."""
    contract = await ContractService(store).get_contract(contract_id)
    activities = await ActivityService(store).list_for_contract(contract.name)
    return MaintenanceActivityList(activities=activities, total=len(activities))


@router.put("/{contract_id}", response_model=Contract)
async def update_contract(
    contract_id: str,
    data: ContractUpdate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_contracts)],
) -> Contract:
    """Update a contract; a new name is propagated to the activities that involve it."""
    return await ContractService(store, user.user_id).update_contract(contract_id, data)


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contract(
    contract_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_contracts)],
) -> None:
    await ContractService(store, user.user_id).delete_contract(contract_id)
