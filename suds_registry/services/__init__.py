"""Domain services over the document store."""

from .activity_service import ActivityService
from .catalog_service import CatalogService
from .contract_service import ContractService
from .reorder_service import ReorderResult, ReorderService
from .suds_type_service import SudsTypeService

__all__ = [
    "ActivityService",
    "CatalogService",
    "ContractService",
    "ReorderResult",
    "ReorderService",
    "SudsTypeService",
]
