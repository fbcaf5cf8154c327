"""Shared base for schemas mirroring camelCase document fields."""

from datetime import datetime, timezone
from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from suds_registry.store.base import StoredDocument


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentRecord(CamelModel):
    """A typed view over a stored document; defaults are resolved on load."""

    id: str

    @classmethod
    def from_document(cls, document: StoredDocument) -> Self:
        return cls.model_validate({**document.fields, "id": document.id})

    def to_fields(self) -> dict[str, Any]:
        """Serialize to persisted document fields (without the id)."""
        return self.model_dump(by_alias=True, exclude={"id"}, mode="json")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
