"""Vehicle record update domain service."""

import structlog

from ..entities.vehicle_modification import VehicleAttributes, VehicleCatalogIds
from ..errors import NotFoundError
from ..interfaces import IVehicleRepository

logger = structlog.get_logger()


class VehicleRecordUpdater:
    """Overwrites the vehicle identified by serial number with resolved data."""

    def __init__(self, vehicle_repository: IVehicleRepository):
        self.vehicle_repository = vehicle_repository

    async def update(self, attributes: VehicleAttributes, catalog_ids: VehicleCatalogIds) -> int:
        """
        Apply the update inside the caller's transaction.

        Returns:
            The vehicle id

        Raises:
            NotFoundError: no vehicle has ``attributes.serial``
        """
        vehicle_id = await self.vehicle_repository.update_by_serial(attributes, catalog_ids)

        if vehicle_id is None:
            raise NotFoundError(
                f"Vehicle with serial number '{attributes.serial}' not found",
                {"serial": attributes.serial},
            )

        logger.debug("Vehicle row updated", serial=attributes.serial, vehicle_id=vehicle_id)
        return vehicle_id
