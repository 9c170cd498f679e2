from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..domain.entities.vehicle_modification import (
    ActingUser,
    InsurancePolicy,
    ModificationOutcome,
    ModificationRequest,
    VehicleAttributes,
)
from ..domain.entities.vehicle_record import VehicleRecord


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VehicleAttributesIn(CamelModel):
    """Vehicle data of a modification request. Catalog fields are free text."""

    serial: str = Field(..., description="Vehicle serial number (NIV)", examples=["NIV12345"])
    year: int = Field(..., description="Model year", examples=[2020])
    vehicle_class: str = Field(..., alias="class", description="Vehicle class", examples=["Automóvil"])
    vehicle_type: str = Field(..., alias="type", description="Vehicle type within its class",
                              examples=["Sedán"])
    make: str = Field(..., description="Make", examples=["Nissan"])
    submodel: str = Field(..., description="Submodel", examples=["Versa"])
    version: Optional[str] = Field(None, description="Version, used for category ranking")
    use: Optional[str] = None
    fuel: Optional[str] = None
    origin: Optional[str] = None
    color: Optional[str] = Field(None, examples=["Azul"])
    passengers: Optional[int] = None
    cylinders: Optional[int] = None
    doors: Optional[int] = None
    engine_number: Optional[str] = None
    previous_plate: Optional[str] = None
    assigned_plate: Optional[str] = None
    weight_class: Optional[str] = None
    capacity: Optional[str] = None
    service_type: Optional[int] = None
    plate_type: Optional[str] = None
    vehicular_key: Optional[str] = Field(None, description="Classification key for the category lookup")

    @field_validator('serial')
    @classmethod
    def strip_serial(cls, v):
        return v.strip() if v else v

    def to_domain(self) -> VehicleAttributes:
        return VehicleAttributes(**self.model_dump(by_alias=False))


class InsurancePolicyIn(CamelModel):
    concession_id: int = Field(..., description="Concession the policy belongs to")
    insurer_name: str = Field(..., description="Insurance company")
    policy_number: str
    issue_date: date
    expiration_date: date
    payment_folio: Optional[str] = None
    remarks: Optional[str] = None

    def to_domain(self) -> InsurancePolicy:
        return InsurancePolicy(**self.model_dump(by_alias=False))


class ActingUserIn(CamelModel):
    user_id: Optional[int] = None
    profile_id: Optional[int] = None
    smart_card_id: Optional[int] = None
    delegation_id: Optional[int] = None

    def to_domain(self) -> ActingUser:
        return ActingUser(**self.model_dump(by_alias=False))


class ModificationRequestIn(CamelModel):
    """Vehicle modification request body."""

    vehicle_attributes: VehicleAttributesIn
    insurance_policy: InsurancePolicyIn
    acting_user: ActingUserIn = Field(default_factory=ActingUserIn)

    def to_domain(self) -> ModificationRequest:
        return ModificationRequest(
            vehicle=self.vehicle_attributes.to_domain(),
            insurance=self.insurance_policy.to_domain(),
            acting_user=self.acting_user.to_domain(),
        )


class ModificationResponse(CamelModel):
    """Result of a modification; ``status`` is ``partial`` when only the vehicle side succeeded."""

    vehicle_id: int
    status: str
    vehicle_updated: bool
    insurance_updated: bool
    insurance_error: Optional[str] = None
    category_id: int = 0
    created_catalog_entries: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    states: List[str] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: ModificationOutcome) -> "ModificationResponse":
        return cls(
            vehicle_id=outcome.vehicle_id,
            status=outcome.status,
            vehicle_updated=outcome.vehicle_updated,
            insurance_updated=outcome.insurance_updated,
            insurance_error=outcome.insurance_error,
            category_id=outcome.category_id,
            created_catalog_entries=outcome.created_entries,
            warnings=outcome.warnings,
            states=[s.value for s in outcome.states],
        )


class VehicleOut(CamelModel):
    vehicle_id: int
    serial: str
    concession_id: Optional[int] = None
    status_id: Optional[int] = None
    status: Optional[str] = Field(None, description="Status label, or the raw id when unknown")
    year: Optional[int] = None
    vehicle_class: Optional[str] = Field(None, alias="class")
    vehicle_type: Optional[str] = Field(None, alias="type")
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

    @classmethod
    def from_record(cls, record: VehicleRecord) -> "VehicleOut":
        return cls(**record.to_dict())


class InsuranceOut(CamelModel):
    concession_id: int
    insurer_name: str
    policy_number: str
    issue_date: date
    expiration_date: date
    payment_folio: Optional[str] = None
    remarks: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_policy(cls, policy: InsurancePolicy) -> "InsuranceOut":
        return cls(**policy.__dict__)


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status")
    version: str
    databases: Dict[str, bool] = Field(default_factory=dict)
    details: Dict[str, Any] = Field(default_factory=dict)
