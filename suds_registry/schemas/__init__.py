from suds_registry.schemas.activity import (
    ActivityDetailUpdate,
    ActivityStatus,
    ActivityToggle,
    CatalogEntry,
    DependenciesUpdate,
    DisplayActivity,
    MaintenanceActivity,
    ValidationStatus,
    ValidationUpdate,
)
from suds_registry.schemas.catalog import Direction, MoveRequest, ReorderResponse
from suds_registry.schemas.contract import Contract, ContractCreate, ContractUpdate
from suds_registry.schemas.suds_type import LocationTag, SudsType, SudsTypeCreate, SudsTypeUpdate

__all__ = [
    "ActivityDetailUpdate",
    "ActivityStatus",
    "ActivityToggle",
    "CatalogEntry",
    "Contract",
    "ContractCreate",
    "ContractUpdate",
    "DependenciesUpdate",
    "Direction",
    "DisplayActivity",
    "LocationTag",
    "MaintenanceActivity",
    "MoveRequest",
    "ReorderResponse",
    "SudsType",
    "SudsTypeCreate",
    "SudsTypeUpdate",
    "ValidationStatus",
    "ValidationUpdate",
]
