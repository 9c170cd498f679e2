from .vehicle_modification import (
    OPERATION_MODIFY,
    UNCLASSIFIED_CATEGORY,
    ActingUser,
    CategoryResolution,
    InsurancePolicy,
    ModificationOutcome,
    ModificationRequest,
    ResolvedLookups,
    VehicleAttributes,
    VehicleCatalogIds,
    WorkflowState,
)
from .vehicle_record import VehicleRecord

__all__ = [
    "OPERATION_MODIFY",
    "UNCLASSIFIED_CATEGORY",
    "ActingUser",
    "CategoryResolution",
    "InsurancePolicy",
    "ModificationOutcome",
    "ModificationRequest",
    "ResolvedLookups",
    "VehicleAttributes",
    "VehicleCatalogIds",
    "WorkflowState",
    "VehicleRecord",
]
