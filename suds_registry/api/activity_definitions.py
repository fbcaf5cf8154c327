"""API endpoints for the activity names defined in each category."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from suds_registry.core.capabilities import EditScope
from suds_registry.core.config import get_settings
from suds_registry.core.dependencies import (
    CurrentUser,
    get_current_user,
    get_store,
    require_capability,
)
from suds_registry.core.rate_limit import limiter
from suds_registry.schemas.catalog import (
    ActivityDefinitionCreate,
    ActivityDefinitionMap,
    ActivityDefinitionRename,
    MoveRequest,
    ReorderResponse,
)
from suds_registry.services.activity_graph import activity_names_by_category
from suds_registry.services.activity_service import ActivityService
from suds_registry.services.catalog_service import CatalogService
from suds_registry.services.errors import NotFoundError
from suds_registry.services.reorder_service import ReorderService
from suds_registry.store.base import DocumentStore

router = APIRouter(prefix="/api/activity-definitions", tags=["activity-definitions"])

logger = logging.getLogger(__name__)

can_edit_definitions = require_capability(EditScope.ACTIVITY_DEFINITIONS)


async def _definition_map(store: DocumentStore) -> ActivityDefinitionMap:
    catalog = CatalogService(store)
    categories = await catalog.get_categories()
    definitions = await catalog.get_definitions()
    records = await ActivityService(store).list_activities()
    return ActivityDefinitionMap(
        definitions=definitions,
        columns=activity_names_by_category(categories, definitions, records),
    )


@router.get("", response_model=ActivityDefinitionMap)
async def list_activity_definitions(
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ActivityDefinitionMap:
    """Defined activity names per category, plus the grid columns per category."""
    return await _definition_map(store)


@router.post(
    "/{category}",
    response_model=ActivityDefinitionMap,
    status_code=status.HTTP_201_CREATED,
)
async def add_activity_definition(
    category: str,
    data: ActivityDefinitionCreate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_definitions)],
) -> ActivityDefinitionMap:
    activity_name = await CatalogService(store, user.user_id).add_activity_definition(
        category, data.name
    )
    logger.info(f"Activity defined: category={category} activity={activity_name}")
    return await _definition_map(store)


@router.put("/{category}/{activity_name}", response_model=ActivityDefinitionMap)
async def rename_activity_definition(
    category: str,
    activity_name: str,
    data: ActivityDefinitionRename,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_definitions)],
) -> ActivityDefinitionMap:
    """Rename an activity; records using the old name are renamed with it."""
    await CatalogService(store, user.user_id).rename_activity_definition(
        category, activity_name, data.new_name
    )
    return await _definition_map(store)


@router.delete("/{category}/{activity_name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity_definition(
    category: str,
    activity_name: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_definitions)],
) -> None:
    """Delete an activity name and every record that uses it."""
    await CatalogService(store, user.user_id).delete_activity_definition(category, activity_name)


@router.post("/{category}/{activity_name}/move", response_model=ReorderResponse)
@limiter.limit(get_settings().RATE_LIMIT_WRITE)
async def move_activity_definition(
    request: Request,
    category: str,
    activity_name: str,
    move: MoveRequest,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_definitions)],
) -> ReorderResponse:
    current_definitions = await CatalogService(store).get_definitions()
    if activity_name not in current_definitions.get(category, []):
        raise NotFoundError(f"Activity {activity_name!r} not found in category {category!r}")

    result = await ReorderService(store, user.user_id).move_activity_definition(
        category, activity_name, move.direction, current_definitions
    )
    logger.info(
        f"Activity move: category={category} activity={activity_name} "
        f"direction={move.direction.value} moved={result.moved}"
    )
    return ReorderResponse(moved=result.moved, order=result.order)
