"""Pydantic schemas for maintenance activity records."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from suds_registry.schemas.base import CamelModel, DocumentRecord


class ActivityStatus(str, Enum):
    """Contractual status of an activity; values match stored documents."""

    INCLUDED_IN_CONTRACT = "verde"
    EASILY_INTEGRABLE = "amarillo"
    SPECIFIC_ACTIVITY = "rojo"
    NOT_APPLICABLE = "no_aplica"
    UNSET = ""


class ValidationStatus(str, Enum):
    PENDING = "pendiente"
    VALIDATED = "validado"
    REJECTED = "rechazado"


class MaintenanceActivity(DocumentRecord):
    """Activity record for one (SUDS type, category, activity name) triple.

    Stored documents written by older clients may omit any optional field or
    carry nulls; those are resolved to the defaults below when loaded.
    """

    suds_type_id: str
    category: str
    activity_name: str
    applies: bool = False
    status: ActivityStatus = ActivityStatus.UNSET
    comment: str = ""
    frequency: str = ""
    involved_contracts: list[str] = Field(default_factory=list)
    validation_status: ValidationStatus = ValidationStatus.PENDING
    validator_comment: str = ""
    validated_by: str = ""
    validation_timestamp: datetime | None = None
    dependent_activities: list[str] = Field(default_factory=list)
    last_updated_by: str | None = None
    timestamp: datetime | None = None

    @field_validator("applies", mode="before")
    @classmethod
    def none_as_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def none_as_unset(cls, v: Any) -> Any:
        return ActivityStatus.UNSET if v is None else v

    @field_validator("validation_status", mode="before")
    @classmethod
    def blank_as_pending(cls, v: Any) -> Any:
        return ValidationStatus.PENDING if v in (None, "") else v

    @field_validator("comment", "frequency", "validator_comment", "validated_by", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("involved_contracts", "dependent_activities", mode="before")
    @classmethod
    def none_as_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.suds_type_id, self.category, self.activity_name)


class ActivityToggle(CamelModel):
    """Identifies the activity whose `applies` flag is flipped."""

    suds_type_id: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    activity_name: str = Field(..., min_length=1)


class ActivityDetailUpdate(CamelModel):
    """Editable detail fields; any change resets validation to pending."""

    status: ActivityStatus | None = None
    comment: str | None = None
    frequency: str | None = None
    involved_contracts: list[str] | None = None


class ValidationUpdate(CamelModel):
    validation_status: ValidationStatus
    validator_comment: str = ""


class DependenciesUpdate(ActivityToggle):
    """Dependents selected for an activity.

    Entries are either activity record ids or catalog ids
    (`sudsTypeId/category/activityName`) for activities without a record yet.
    """

    dependent_activities: list[str] = Field(default_factory=list)


class DisplayActivity(MaintenanceActivity):
    """Activity record annotated for nested display."""

    is_dependent: bool = False


class DisplayActivityList(CamelModel):
    suds_type_id: str
    activities: list[DisplayActivity]
    total: int


class MaintenanceActivityList(CamelModel):
    activities: list[MaintenanceActivity]
    total: int


class CatalogEntry(CamelModel):
    """A possible activity: one defined name of one category for one SUDS type."""

    id: str
    suds_type_id: str
    suds_type_name: str
    category: str
    activity_name: str


class CatalogList(CamelModel):
    entries: list[CatalogEntry]
    total: int
