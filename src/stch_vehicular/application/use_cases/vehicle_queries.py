"""Read-only vehicle and insurance queries."""

from typing import List, Optional

from ...domain.entities.vehicle_modification import InsurancePolicy
from ...domain.entities.vehicle_record import VehicleRecord
from ...domain.errors import NotFoundError
from ...domain.interfaces import IInsuranceRepository, IVehicleQueryRepository
from ...domain.value_objects.vehicle_search import build_vehicle_search
from ...infrastructure.catalog_cache import StatusCatalogCache


class VehicleQueryUseCase:
    """Vehicle lookups with the status id mapped to its catalog label."""

    def __init__(self,
                 vehicle_query_repository: IVehicleQueryRepository,
                 insurance_repository: IInsuranceRepository,
                 status_cache: StatusCatalogCache):
        self.vehicle_query_repository = vehicle_query_repository
        self.insurance_repository = insurance_repository
        self.status_cache = status_cache

    async def get_vehicle(self, vehicle_id: int) -> VehicleRecord:
        record = await self.vehicle_query_repository.get(vehicle_id)
        if record is None:
            raise NotFoundError(f"Vehicle {vehicle_id} not found", {"vehicle_id": vehicle_id})
        return await self._with_status(record)

    async def search_vehicles(self,
                              plate: Optional[str] = None,
                              serial: Optional[str] = None,
                              engine_number: Optional[str] = None) -> List[VehicleRecord]:
        """
        Search by plate, serial or engine number (first non-blank wins).

        Raises:
            ValidationError: no filter supplied
            NotFoundError: nothing matched
        """
        criteria = build_vehicle_search(plate, serial, engine_number)
        records = await self.vehicle_query_repository.search(criteria)
        if not records:
            raise NotFoundError("No vehicle matches the search", {"criteria": repr(criteria)})
        return [await self._with_status(r) for r in records]

    async def get_insurance(self, concession_id: int) -> InsurancePolicy:
        policy = await self.insurance_repository.get(concession_id)
        if policy is None:
            raise NotFoundError(
                f"No insurance policy for concession {concession_id}",
                {"concession_id": concession_id},
            )
        return policy

    async def _with_status(self, record: VehicleRecord) -> VehicleRecord:
        return record.with_status(await self.status_cache.map_value(record.status_id))
