"""Repository interfaces used by the modification workflow and vehicle queries."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities.vehicle_modification import (
    ActingUser,
    InsurancePolicy,
    VehicleAttributes,
    VehicleCatalogIds,
)
from .entities.vehicle_record import VehicleRecord
from .value_objects.vehicle_search import VehicleSearch


class IVehicleRepository(ABC):

    @abstractmethod
    async def update_by_serial(self,
                               attributes: VehicleAttributes,
                               catalog_ids: VehicleCatalogIds) -> Optional[int]:
        """Overwrite the vehicle with ``attributes.serial``; ``None`` when no row matches."""
        pass


class IAuditRepository(ABC):

    @abstractmethod
    async def append(self, vehicle_id: int, serial: str, user: ActingUser, operation: int) -> int:
        """Append an audit row and return its id."""
        pass


class IInsuranceRepository(ABC):

    @abstractmethod
    async def upsert(self, policy: InsurancePolicy) -> bool:
        """Insert or overwrite the policy of ``policy.concession_id``."""
        pass

    @abstractmethod
    async def get(self, concession_id: int) -> Optional[InsurancePolicy]:
        pass


class IActingUserRepository(ABC):

    @abstractmethod
    async def find(self, user_id: int) -> Optional[ActingUser]:
        """Profile, smart-card and delegation of ``user_id``."""
        pass


class IStatusRepository(ABC):

    @abstractmethod
    async def load_all(self) -> dict:
        """Every vehicle status as ``{id: label}``."""
        pass


class IVehicleQueryRepository(ABC):

    @abstractmethod
    async def get(self, vehicle_id: int) -> Optional[VehicleRecord]:
        pass

    @abstractmethod
    async def search(self, criteria: VehicleSearch) -> List[VehicleRecord]:
        pass
