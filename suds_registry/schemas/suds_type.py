"""Pydantic schemas for SUDS installation types."""

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from suds_registry.schemas.base import CamelModel, DocumentRecord


class LocationTag(str, Enum):
    """Where an installation type is found; values match stored documents."""

    SIDEWALK = "acera"
    GREEN_AREA = "zona_verde"
    ROADWAY = "viario"
    AUXILIARY_INFRASTRUCTURE = "infraestructura"


class SudsType(DocumentRecord):
    """Installation type as stored in the `sudsTypes` collection."""

    name: str = ""
    description: str = ""
    image_urls: list[str] = Field(default_factory=list)
    location_types: list[LocationTag] = Field(default_factory=list)
    order: int | None = Field(None, ge=0)
    last_updated_by: str | None = None
    timestamp: datetime | None = None

    # Set when `order` was assigned from fetch position rather than read from storage
    order_is_provisional: bool = Field(False, exclude=True)

    @field_validator("name", "description", mode="before")
    @classmethod
    def none_as_empty(cls, v: str | None) -> str:
        return "" if v is None else v

    @field_validator("image_urls", "location_types", mode="before")
    @classmethod
    def none_as_empty_list(cls, v: list | None) -> list:
        return [] if v is None else v


class SudsTypeCreate(CamelModel):
    """Schema for creating an installation type."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    image_urls: list[str] = Field(default_factory=list)
    location_types: list[LocationTag] = Field(default_factory=list)

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("image_urls")
    @classmethod
    def drop_blank_urls(cls, v: list[str]) -> list[str]:
        return [url.strip() for url in v if url.strip()]


class SudsTypeUpdate(CamelModel):
    """Schema for updating an installation type; omitted fields are left as they are."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    image_urls: list[str] | None = None
    location_types: list[LocationTag] | None = None

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class SudsTypeList(CamelModel):
    """Schema for listing installation types in display order."""

    suds_types: list[SudsType]
    total: int
