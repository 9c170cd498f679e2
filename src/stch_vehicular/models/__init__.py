from .vehicle import (
    ActingUserIn,
    HealthResponse,
    InsuranceOut,
    InsurancePolicyIn,
    ModificationRequestIn,
    ModificationResponse,
    VehicleAttributesIn,
    VehicleOut,
)

__all__ = [
    "ActingUserIn",
    "HealthResponse",
    "InsuranceOut",
    "InsurancePolicyIn",
    "ModificationRequestIn",
    "ModificationResponse",
    "VehicleAttributesIn",
    "VehicleOut",
]
