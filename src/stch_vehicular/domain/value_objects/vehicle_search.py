"""Vehicle search criteria as an explicit tagged variant."""

from dataclasses import dataclass
from typing import Optional, Union

from ..errors import ValidationError


@dataclass(frozen=True)
class SearchByPlate:
    plate: str


@dataclass(frozen=True)
class SearchBySerial:
    serial: str


@dataclass(frozen=True)
class SearchByEngineNumber:
    engine_number: str


VehicleSearch = Union[SearchByPlate, SearchBySerial, SearchByEngineNumber]


def build_vehicle_search(plate: Optional[str] = None,
                         serial: Optional[str] = None,
                         engine_number: Optional[str] = None) -> VehicleSearch:
    """
    Pick the search variant from optional query filters.

    Precedence is plate, then serial, then engine number; at least one
    filter must be non-blank.
    """
    if plate and plate.strip():
        return SearchByPlate(plate.strip())
    if serial and serial.strip():
        return SearchBySerial(serial.strip())
    if engine_number and engine_number.strip():
        return SearchByEngineNumber(engine_number.strip())
    raise ValidationError(["At least one of plate, serial or engine number is required"])
