"""API endpoints for maintenance activity records."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from suds_registry.core.capabilities import EditScope
from suds_registry.core.config import get_settings
from suds_registry.core.dependencies import (
    CurrentUser,
    get_current_user,
    get_store,
    require_capability,
)
from suds_registry.core.rate_limit import limiter
from suds_registry.schemas.activity import (
    ActivityDetailUpdate,
    ActivityToggle,
    CatalogList,
    DependenciesUpdate,
    DisplayActivity,
    DisplayActivityList,
    MaintenanceActivity,
    MaintenanceActivityList,
    ValidationUpdate,
)
from suds_registry.services.activity_service import ActivityService
from suds_registry.store.base import DocumentStore

router = APIRouter(prefix="/api/activities", tags=["activities"])

logger = logging.getLogger(__name__)

can_edit_records = require_capability(EditScope.ACTIVITY_RECORDS)
can_validate = require_capability(EditScope.VALIDATION)


@router.get("", response_model=MaintenanceActivityList)
async def list_activities(
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
    suds_type_id: Annotated[str | None, Query(alias="sudsTypeId")] = None,
) -> MaintenanceActivityList:
    activities = await ActivityService(store).list_activities(suds_type_id)
    return MaintenanceActivityList(activities=activities, total=len(activities))


@router.get("/catalog", response_model=CatalogList)
async def get_activity_catalog(
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CatalogList:
    """Every defined activity for every SUDS type, whether or not a record exists."""
    entries = await ActivityService(store).build_catalog()
    return CatalogList(entries=entries, total=len(entries))


@router.get("/display/{suds_type_id}", response_model=DisplayActivityList)
async def get_display_order(
    suds_type_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> DisplayActivityList:
    """Applicable activities of a SUDS type, each followed by its dependents."""
    entries = await ActivityService(store).display_order(suds_type_id)
    activities = [
        DisplayActivity.model_validate(
            {**entry.record.model_dump(), "is_dependent": entry.is_dependent}
        )
        for entry in entries
    ]
    return DisplayActivityList(
        suds_type_id=suds_type_id, activities=activities, total=len(activities)
    )


@router.post("/toggle", response_model=MaintenanceActivity)
async def toggle_activity(
    data: ActivityToggle,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_records)],
) -> MaintenanceActivity:
    """Switch an activity on or off for a SUDS type."""
    activity = await ActivityService(store, user.user_id).toggle_applies(
        data.suds_type_id, data.category, data.activity_name
    )
    logger.info(f"Activity toggled: id={activity.id} applies={activity.applies}")
    return activity


@router.put("/dependencies", response_model=MaintenanceActivity)
@limiter.limit(get_settings().RATE_LIMIT_WRITE)
async def save_dependencies(
    request: Request,
    data: DependenciesUpdate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_records)],
) -> MaintenanceActivity:
    """Replace the dependents of an activity; selected dependents are switched on."""
    return await ActivityService(store, user.user_id).save_dependencies(data)


@router.get("/{activity_id}", response_model=MaintenanceActivity)
async def get_activity(
    activity_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MaintenanceActivity:
    return await ActivityService(store).get_activity(activity_id)


@router.patch("/{activity_id}", response_model=MaintenanceActivity)
async def update_activity_detail(
    activity_id: str,
    data: ActivityDetailUpdate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_records)],
) -> MaintenanceActivity:
    """Edit status, comment, frequency or contracts; validation returns to pending."""
    return await ActivityService(store, user.user_id).update_detail(activity_id, data)


@router.put("/{activity_id}/validation", response_model=MaintenanceActivity)
async def validate_activity(
    activity_id: str,
    data: ValidationUpdate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_validate)],
) -> MaintenanceActivity:
    return await ActivityService(store, user.user_id).validate(activity_id, data)
