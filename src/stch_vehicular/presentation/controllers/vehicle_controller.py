"""Controllers for vehicle modification and vehicle lookups."""

from typing import List, Optional
import structlog

from fastapi import HTTPException

from ...domain.errors import VehicleRegistryError
from ...infrastructure.di_container import DIContainer, get_container
from ...models.vehicle import (
    InsuranceOut,
    ModificationRequestIn,
    ModificationResponse,
    VehicleOut,
)

logger = structlog.get_logger()


def to_http_exception(error: VehicleRegistryError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.to_dict())


class VehicleController:
    """Converts API models to domain requests and domain errors to HTTP errors."""

    def __init__(self, container: Optional[DIContainer] = None):
        self.container = container or get_container()

    async def modify_vehicle(self, request: ModificationRequestIn) -> ModificationResponse:
        """
        Run the modification workflow.

        Args:
            request: API request body

        Returns:
            API result; ``status`` is ``partial`` when the insurance step failed
        """
        try:
            use_case = self.container.get('modify_vehicle_use_case')
            outcome = await use_case.execute(request.to_domain())
            return ModificationResponse.from_outcome(outcome)

        except VehicleRegistryError as e:
            logger.warning("Vehicle modification rejected",
                           serial=request.vehicle_attributes.serial,
                           error_code=e.code,
                           error=e.message)
            raise to_http_exception(e) from e
        except Exception as e:
            logger.error("Vehicle modification failed",
                         serial=request.vehicle_attributes.serial,
                         error=str(e),
                         exc_info=True)
            raise HTTPException(
                status_code=500,
                detail={"error": "internal_error", "message": "Vehicle modification failed"},
            ) from e

    async def get_vehicle(self, vehicle_id: int) -> VehicleOut:
        try:
            record = await self.container.get('vehicle_query_use_case').get_vehicle(vehicle_id)
        except VehicleRegistryError as e:
            raise to_http_exception(e) from e
        return VehicleOut.from_record(record)

    async def search_vehicles(self,
                              plate: Optional[str] = None,
                              serial: Optional[str] = None,
                              engine_number: Optional[str] = None) -> List[VehicleOut]:
        try:
            records = await self.container.get('vehicle_query_use_case').search_vehicles(
                plate, serial, engine_number
            )
        except VehicleRegistryError as e:
            raise to_http_exception(e) from e
        return [VehicleOut.from_record(r) for r in records]

    async def get_insurance(self, concession_id: int) -> InsuranceOut:
        try:
            policy = await self.container.get('vehicle_query_use_case').get_insurance(concession_id)
        except VehicleRegistryError as e:
            raise to_http_exception(e) from e
        return InsuranceOut.from_policy(policy)

    async def refresh_status_catalog(self) -> dict:
        cache = self.container.get('status_cache')
        cache.invalidate()
        refreshed = await cache.refresh()
        if not refreshed:
            raise HTTPException(
                status_code=503,
                detail={"error": "catalog_unavailable", "message": "Status catalog could not be reloaded"},
            )
        return {"refreshed": True, **cache.get_stats()}
