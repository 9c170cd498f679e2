from .catalog import CatalogKind, CatalogLabels, CatalogMatch
from .vehicle_search import (
    SearchByEngineNumber,
    SearchByPlate,
    SearchBySerial,
    VehicleSearch,
    build_vehicle_search,
)

__all__ = [
    "CatalogKind",
    "CatalogLabels",
    "CatalogMatch",
    "SearchByEngineNumber",
    "SearchByPlate",
    "SearchBySerial",
    "VehicleSearch",
    "build_vehicle_search",
]
