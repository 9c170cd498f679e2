"""Read-side vehicle entity."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class VehicleRecord:
    """A stored vehicle as returned by read operations."""

    vehicle_id: int
    serial: str
    concession_id: Optional[int] = None
    status_id: Optional[int] = None
    status: Optional[str] = None
    year: Optional[int] = None
    vehicle_class: Optional[str] = None
    vehicle_type: Optional[str] = None
    make: Optional[str] = None
    submodel: Optional[str] = None
    version: Optional[str] = None
    use: Optional[str] = None
    fuel: Optional[str] = None
    origin: Optional[str] = None
    color: Optional[str] = None
    engine_number: Optional[str] = None
    passengers: Optional[int] = None
    cylinders: Optional[int] = None
    doors: Optional[int] = None
    previous_plate: Optional[str] = None
    assigned_plate: Optional[str] = None
    weight_class: Optional[str] = None
    capacity: Optional[str] = None
    service_type: Optional[int] = None
    plate_type: Optional[str] = None
    category_id: int = 0
    vehicular_key: Optional[str] = None
    updated_at: Optional[datetime] = None

    def with_status(self, label: Any) -> "VehicleRecord":
        return replace(self, status=None if label is None else str(label))

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)
