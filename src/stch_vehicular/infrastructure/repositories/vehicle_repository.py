"""Vehicle and audit repositories for the vehicle database."""

from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...db.models import BitacoraVehiculo, Vehiculo
from ...domain.entities.vehicle_modification import ActingUser, VehicleAttributes, VehicleCatalogIds
from ...domain.errors import TransactionError
from ...domain.interfaces import IAuditRepository, IVehicleRepository


class SqlVehicleRepository(IVehicleRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def update_by_serial(self,
                               attributes: VehicleAttributes,
                               catalog_ids: VehicleCatalogIds) -> Optional[int]:
        stmt = (
            select(Vehiculo)
            .where(Vehiculo.numero_serie == attributes.serial)
            .with_for_update()
        )

        try:
            vehicle = (await self.session.execute(stmt)).scalar_one_or_none()
            if vehicle is None:
                return None

            vehicle.modelo = attributes.year
            vehicle.numero_pasajeros = attributes.passengers
            vehicle.numero_cilindros = attributes.cylinders
            vehicle.numero_puertas = attributes.doors
            vehicle.numero_motor = attributes.engine_number
            vehicle.placa_anterior = attributes.previous_plate
            vehicle.placa_asignada = attributes.assigned_plate
            vehicle.clasificacion_peso = attributes.weight_class
            vehicle.capacidad = attributes.capacity
            vehicle.id_tipo_servicio = attributes.service_type
            vehicle.clave_vehicular = attributes.vehicular_key

            # catalog id / label pairs
            vehicle.id_clase, vehicle.clase = catalog_ids.class_id, attributes.vehicle_class
            vehicle.id_tipo, vehicle.tipo = catalog_ids.type_id, attributes.vehicle_type
            # make, submodel and version take the label of a category-supplied id
            vehicle.id_marca = catalog_ids.make_id
            vehicle.marca = catalog_ids.make_label or attributes.make
            vehicle.id_submarca = catalog_ids.submodel_id
            vehicle.submarca = catalog_ids.submodel_label or attributes.submodel
            vehicle.id_version = catalog_ids.version_id
            vehicle.version = catalog_ids.version_label or attributes.version
            vehicle.id_uso, vehicle.uso = catalog_ids.use_id, attributes.use
            vehicle.id_combustible, vehicle.combustible = catalog_ids.fuel_id, attributes.fuel
            vehicle.id_origen, vehicle.origen = catalog_ids.origin_id, attributes.origin
            vehicle.id_color, vehicle.color = catalog_ids.color_id, attributes.color
            vehicle.id_tipo_placa, vehicle.tipo_placa = catalog_ids.plate_type_id, attributes.plate_type
            vehicle.id_categoria = catalog_ids.category_id

            vehicle.fecha_actualizacion = func.now()

            vehicle_id = vehicle.id_vehiculo
            await self.session.flush()
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError(
                "Vehicle update failed", {"serial": attributes.serial}
            ) from e

        return vehicle_id


class SqlAuditRepository(IAuditRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, vehicle_id: int, serial: str, user: ActingUser, operation: int) -> int:
        entry = BitacoraVehiculo(
            id_vehiculo=vehicle_id,
            numero_serie=serial,
            id_usuario=user.user_id or 0,
            id_perfil=user.profile_id or 0,
            id_tarjeta_inteligente=user.smart_card_id or 0,
            id_delegacion=user.delegation_id or 0,
            id_operacion=operation,
        )

        try:
            self.session.add(entry)
            await self.session.flush()
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("Audit entry could not be written", {"serial": serial}) from e

        return entry.id
