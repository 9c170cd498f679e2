"""Entities of the vehicle/insurance modification workflow."""

import enum
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import List, Optional

from ..value_objects.catalog import CatalogLabels

OPERATION_MODIFY = 2
UNCLASSIFIED_CATEGORY = 0


class WorkflowState(str, enum.Enum):
    IDLE = "Idle"
    LOOKUPS_RESOLVING = "LookupsResolving"
    CATEGORY_RESOLVING = "CategoryResolving"
    VEHICLE_UPDATING = "VehicleUpdating"
    AUDIT_WRITING = "AuditWriting"
    VEHICLE_COMMITTED = "VehicleCommitted"
    INSURANCE_UPSERTING = "InsuranceUpserting"
    DONE = "Done"
    ABORTED = "Aborted"


@dataclass(frozen=True)
class ActingUser:
    """Who performs a modification. Unknown ids are ``None`` until defaulted."""

    user_id: Optional[int] = None
    profile_id: Optional[int] = None
    smart_card_id: Optional[int] = None
    delegation_id: Optional[int] = None

    @property
    def needs_resolution(self) -> bool:
        """Only the user id is known; the rest comes from the users database."""
        return self.user_id is not None and all(
            v is None for v in (self.profile_id, self.smart_card_id, self.delegation_id)
        )

    def merge(self, resolved: Optional["ActingUser"]) -> "ActingUser":
        """Fill unknown ids from ``resolved`` without overriding supplied ones."""
        if resolved is None:
            return self
        return ActingUser(
            user_id=self.user_id if self.user_id is not None else resolved.user_id,
            profile_id=self.profile_id if self.profile_id is not None else resolved.profile_id,
            smart_card_id=self.smart_card_id if self.smart_card_id is not None else resolved.smart_card_id,
            delegation_id=self.delegation_id if self.delegation_id is not None else resolved.delegation_id,
        )

    def with_defaults(self) -> "ActingUser":
        """Replace every unknown id with 0 (system / unknown actor)."""
        return ActingUser(
            user_id=self.user_id or 0,
            profile_id=self.profile_id or 0,
            smart_card_id=self.smart_card_id or 0,
            delegation_id=self.delegation_id or 0,
        )


@dataclass(frozen=True)
class VehicleAttributes:
    """Vehicle data supplied by the caller, catalog fields as free text."""

    serial: str
    year: int
    vehicle_class: str
    vehicle_type: str
    make: str
    submodel: str
    version: Optional[str] = None
    use: Optional[str] = None
    fuel: Optional[str] = None
    origin: Optional[str] = None
    color: Optional[str] = None
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
    vehicular_key: Optional[str] = None

    def catalog_labels(self) -> CatalogLabels:
        return CatalogLabels(
            vehicle_class=self.vehicle_class,
            vehicle_type=self.vehicle_type,
            use=self.use,
            color=self.color,
            fuel=self.fuel,
            make=self.make,
            submodel=self.submodel,
            origin=self.origin,
            plate_type=self.plate_type,
        )


@dataclass(frozen=True)
class InsurancePolicy:
    concession_id: int
    insurer_name: str
    policy_number: str
    issue_date: date
    expiration_date: date
    payment_folio: Optional[str] = None
    remarks: Optional[str] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ModificationRequest:
    vehicle: VehicleAttributes
    insurance: InsurancePolicy
    acting_user: ActingUser = field(default_factory=ActingUser)


@dataclass(frozen=True)
class ResolvedLookups:
    """Ids produced by the lookup resolver."""

    class_id: Optional[int] = None
    type_id: Optional[int] = None
    use_id: Optional[int] = None
    color_id: Optional[int] = None
    fuel_id: Optional[int] = None
    make_id: Optional[int] = None
    submodel_id: Optional[int] = None
    origin_id: Optional[int] = None
    plate_type_id: Optional[int] = None
    created: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryResolution:
    """Combined category lookup result; category 0 means unclassified."""

    category_id: int = UNCLASSIFIED_CATEGORY
    make_id: Optional[int] = None
    submodel_id: Optional[int] = None
    version_id: Optional[int] = None
    make_label: Optional[str] = None
    submodel_label: Optional[str] = None
    version_label: Optional[str] = None

    @property
    def is_classified(self) -> bool:
        return self.category_id != UNCLASSIFIED_CATEGORY


@dataclass(frozen=True)
class VehicleCatalogIds:
    """Final catalog ids written to the vehicle row."""

    class_id: Optional[int] = None
    type_id: Optional[int] = None
    use_id: Optional[int] = None
    color_id: Optional[int] = None
    fuel_id: Optional[int] = None
    make_id: Optional[int] = None
    submodel_id: Optional[int] = None
    version_id: Optional[int] = None
    origin_id: Optional[int] = None
    plate_type_id: Optional[int] = None
    category_id: int = UNCLASSIFIED_CATEGORY
    # catalog labels of category-supplied ids; None keeps the submitted text
    make_label: Optional[str] = None
    submodel_label: Optional[str] = None
    version_label: Optional[str] = None

    @classmethod
    def merge(cls, lookups: ResolvedLookups, category: CategoryResolution) -> "VehicleCatalogIds":
        """Category resolver make/submodel ids, with their labels, win over plain lookups when present."""
        return cls(
            class_id=lookups.class_id,
            type_id=lookups.type_id,
            use_id=lookups.use_id,
            color_id=lookups.color_id,
            fuel_id=lookups.fuel_id,
            make_id=category.make_id if category.make_id is not None else lookups.make_id,
            submodel_id=category.submodel_id if category.submodel_id is not None else lookups.submodel_id,
            version_id=category.version_id,
            origin_id=lookups.origin_id,
            plate_type_id=lookups.plate_type_id,
            category_id=category.category_id,
            make_label=category.make_label,
            submodel_label=category.submodel_label,
            version_label=category.version_label,
        )


@dataclass(frozen=True)
class ModificationOutcome:
    """Result reporting the vehicle side and the insurance side separately."""

    vehicle_id: int
    vehicle_updated: bool
    insurance_updated: bool
    insurance_error: Optional[str] = None
    category_id: int = UNCLASSIFIED_CATEGORY
    states: List[WorkflowState] = field(default_factory=list)
    created_entries: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "ok" if self.vehicle_updated and self.insurance_updated else "partial"

    @property
    def final_state(self) -> WorkflowState:
        return self.states[-1] if self.states else WorkflowState.IDLE

    def with_insurance_failure(self, error: str) -> "ModificationOutcome":
        return replace(self, insurance_updated=False, insurance_error=error)
