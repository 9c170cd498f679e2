"""Domain services of the vehicle modification workflow."""

from .audit_logger import AuditLogger
from .category_resolver import CategoryResolver, ICategoryRepository
from .insurance_upserter import InsuranceUpserter
from .lookup_resolver import ICatalogRepository, LookupResolver
from .vehicle_updater import VehicleRecordUpdater

__all__ = [
    "AuditLogger",
    "CategoryResolver",
    "ICategoryRepository",
    "InsuranceUpserter",
    "ICatalogRepository",
    "LookupResolver",
    "VehicleRecordUpdater",
]
