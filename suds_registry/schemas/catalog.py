"""Pydantic schemas for categories, activity definitions and reordering."""

from enum import Enum

from pydantic import Field

from suds_registry.schemas.base import CamelModel


class Direction(str, Enum):
    """Move direction. Rows move up/down, grid columns move left/right."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class MoveRequest(CamelModel):
    direction: Direction


class ReorderResponse(CamelModel):
    moved: bool
    order: list[str]


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class CategoryList(CamelModel):
    categories: list[str]


class ActivityDefinitionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class ActivityDefinitionRename(CamelModel):
    new_name: str = Field(..., min_length=1, max_length=255)


class ActivityDefinitionMap(CamelModel):
    """Defined activity names per category, plus the full column set per category.

    `columns` also lists names that only exist on activity records.
    """

    definitions: dict[str, list[str]]
    columns: dict[str, list[str]]
