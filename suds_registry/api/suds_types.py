"""API endpoints for SUDS installation types."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from suds_registry.core.capabilities import EditScope
from suds_registry.core.config import get_settings
from suds_registry.core.dependencies import (
    CurrentUser,
    get_current_user,
    get_store,
    require_capability,
)
from suds_registry.core.rate_limit import limiter
from suds_registry.schemas.catalog import MoveRequest, ReorderResponse
from suds_registry.schemas.suds_type import (
    LocationTag,
    SudsType,
    SudsTypeCreate,
    SudsTypeList,
    SudsTypeUpdate,
)
from suds_registry.services.reorder_service import ReorderService
from suds_registry.services.suds_type_service import SudsTypeService
from suds_registry.store.base import DocumentStore

router = APIRouter(prefix="/api/suds-types", tags=["suds-types"])

logger = logging.getLogger(__name__)

can_edit_suds_types = require_capability(EditScope.SUDS_TYPES)


@router.get("", response_model=SudsTypeList)
async def list_suds_types(
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    location: Annotated[
        list[LocationTag] | None, Query(description="Keep types found in any of these locations")
    ] = None,
) -> SudsTypeList:
    """List SUDS types in display order."""
    suds_types = await SudsTypeService(store).list_suds_types(location_filter=location)
    return SudsTypeList(suds_types=suds_types, total=len(suds_types))


@router.post("", response_model=SudsType, status_code=status.HTTP_201_CREATED)
async def create_suds_type(
    data: SudsTypeCreate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_suds_types)],
) -> SudsType:
    return await SudsTypeService(store, user.user_id).create_suds_type(data)


@router.get("/{suds_type_id}", response_model=SudsType)
async def get_suds_type(
    suds_type_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> SudsType:
    return await SudsTypeService(store).get_suds_type(suds_type_id)


@router.put("/{suds_type_id}", response_model=SudsType)
async def update_suds_type(
    suds_type_id: str,
    data: SudsTypeUpdate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_suds_types)],
) -> SudsType:
    return await SudsTypeService(store, user.user_id).update_suds_type(suds_type_id, data)


@router.delete("/{suds_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_suds_type(
    suds_type_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_suds_types)],
) -> None:
    """Delete a SUDS type and every activity record attached to it."""
    await SudsTypeService(store, user.user_id).delete_suds_type(suds_type_id)


@router.post("/{suds_type_id}/move", response_model=ReorderResponse)
@limiter.limit(get_settings().RATE_LIMIT_WRITE)
async def move_suds_type(
    request: Request,
    suds_type_id: str,
    move: MoveRequest,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_suds_types)],
) -> ReorderResponse:
    """Swap a SUDS type with its neighbour in the current display order."""
    service = SudsTypeService(store, user.user_id)
    await service.get_suds_type(suds_type_id)
    current_order = await service.list_suds_types()

    result = await ReorderService(store, user.user_id).move_installation_type(
        suds_type_id, move.direction, current_order
    )
    logger.info(
        f"SUDS type move: id={suds_type_id} direction={move.direction.value} moved={result.moved}"
    )
    return ReorderResponse(moved=result.moved, order=result.order)
