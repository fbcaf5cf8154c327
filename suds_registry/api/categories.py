"""API endpoints for the ordered maintenance category list."""

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
from suds_registry.schemas.catalog import CategoryCreate, CategoryList, MoveRequest, ReorderResponse
from suds_registry.services.catalog_service import CatalogService
from suds_registry.services.errors import NotFoundError
from suds_registry.services.reorder_service import ReorderService
from suds_registry.store.base import DocumentStore

router = APIRouter(prefix="/api/categories", tags=["categories"])

logger = logging.getLogger(__name__)

can_edit_categories = require_capability(EditScope.CATEGORIES)


@router.get("", response_model=CategoryList)
async def list_categories(
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CategoryList:
    return CategoryList(categories=await CatalogService(store).get_categories())


@router.post("", response_model=CategoryList, status_code=status.HTTP_201_CREATED)
async def add_category(
    data: CategoryCreate,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_categories)],
) -> CategoryList:
    """Append a category at the end of the list."""
    categories = await CatalogService(store, user.user_id).add_category(data.name)
    return CategoryList(categories=categories)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    name: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_categories)],
) -> None:
    """Delete a category, its activity definitions and all of its activity records."""
    await CatalogService(store, user.user_id).delete_category(name)


@router.post("/{name}/move", response_model=ReorderResponse)
@limiter.limit(get_settings().RATE_LIMIT_WRITE)
async def move_category(
    request: Request,
    name: str,
    move: MoveRequest,
    store: Annotated[DocumentStore, Depends(get_store)],
    user: Annotated[CurrentUser, Depends(can_edit_categories)],
) -> ReorderResponse:
    current_categories = await CatalogService(store).get_categories()
    if name not in current_categories:
        raise NotFoundError(f"Category {name!r} not found")

    result = await ReorderService(store, user.user_id).move_category(
        name, move.direction, current_categories
    )
    logger.info(f"Category move: category={name} direction={move.direction.value} moved={result.moved}")
    return ReorderResponse(moved=result.moved, order=result.order)
