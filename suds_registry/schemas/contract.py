"""Pydantic schemas for maintenance contracts."""

from datetime import datetime

from pydantic import Field, field_validator

from suds_registry.schemas.base import CamelModel, DocumentRecord


class Contract(DocumentRecord):
    """Contract as stored in the `contracts` collection."""

    name: str = ""
    summary: str = ""
    responsible: str = ""
    logo_url: str = ""
    last_updated_by: str | None = None
    timestamp: datetime | None = None

    @field_validator("name", "summary", "responsible", "logo_url", mode="before")
    @classmethod
    def none_as_empty(cls, v: str | None) -> str:
        return "" if v is None else v


class ContractCreate(CamelModel):
    """Schema for creating a contract."""

    name: str = Field(..., min_length=1, max_length=255)
    summary: str = Field(..., min_length=1)
    responsible: str = Field(..., min_length=1, max_length=255)
    logo_url: str = ""

    @field_validator("name", "summary", "responsible")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("logo_url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return v.strip()


class ContractUpdate(CamelModel):
    """Schema for updating a contract."""

    name: str | None = Field(None, min_length=1, max_length=255)
    summary: str | None = Field(None, min_length=1)
    responsible: str | None = Field(None, min_length=1, max_length=255)
    logo_url: str | None = None

    @field_validator("name", "summary", "responsible")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class ContractList(CamelModel):
    contracts: list[Contract]
    total: int
