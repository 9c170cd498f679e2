from .acting_user_repository import SqlActingUserRepository
from .catalog_repository import CATALOG_MODELS, SqlCatalogRepository
from .category_repository import SqlCategoryRepository
from .insurance_repository import SqlInsuranceRepository
from .vehicle_query_repository import SqlStatusRepository, SqlVehicleQueryRepository
from .vehicle_repository import SqlAuditRepository, SqlVehicleRepository

__all__ = [
    "CATALOG_MODELS",
    "SqlActingUserRepository",
    "SqlAuditRepository",
    "SqlCatalogRepository",
    "SqlCategoryRepository",
    "SqlInsuranceRepository",
    "SqlStatusRepository",
    "SqlVehicleQueryRepository",
    "SqlVehicleRepository",
]
