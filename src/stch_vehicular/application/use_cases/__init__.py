from .modify_vehicle_and_insurance import ModifyVehicleAndInsuranceUseCase, validate_input
from .vehicle_queries import VehicleQueryUseCase

__all__ = ["ModifyVehicleAndInsuranceUseCase", "VehicleQueryUseCase", "validate_input"]
