"""Read-side vehicle repositories."""

from typing import Callable, Dict, List, Optional, Type
from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ...db.models import EstatusVehiculo, Vehiculo
from ...domain.entities.vehicle_record import VehicleRecord
from ...domain.errors import TransactionError
from ...domain.interfaces import IStatusRepository, IVehicleQueryRepository
from ...domain.value_objects.vehicle_search import (
    SearchByEngineNumber,
    SearchByPlate,
    SearchBySerial,
    VehicleSearch,
)

# Search variant -> WHERE clause
SEARCH_FILTERS: Dict[Type, Callable] = {
    SearchByPlate: lambda c: or_(Vehiculo.placa_asignada == c.plate, Vehiculo.placa_anterior == c.plate),
    SearchBySerial: lambda c: Vehiculo.numero_serie == c.serial,
    SearchByEngineNumber: lambda c: Vehiculo.numero_motor == c.engine_number,
}


def to_record(vehicle: Vehiculo) -> VehicleRecord:
    return VehicleRecord(
        vehicle_id=vehicle.id_vehiculo,
        serial=vehicle.numero_serie,
        concession_id=vehicle.id_concesion,
        status_id=vehicle.id_estatus,
        year=vehicle.modelo,
        vehicle_class=vehicle.clase,
        vehicle_type=vehicle.tipo,
        make=vehicle.marca,
        submodel=vehicle.submarca,
        version=vehicle.version,
        use=vehicle.uso,
        fuel=vehicle.combustible,
        origin=vehicle.origen,
        color=vehicle.color,
        engine_number=vehicle.numero_motor,
        passengers=vehicle.numero_pasajeros,
        cylinders=vehicle.numero_cilindros,
        doors=vehicle.numero_puertas,
        previous_plate=vehicle.placa_anterior,
        assigned_plate=vehicle.placa_asignada,
        weight_class=vehicle.clasificacion_peso,
        capacity=vehicle.capacidad,
        service_type=vehicle.id_tipo_servicio,
        plate_type=vehicle.tipo_placa,
        category_id=vehicle.id_categoria,
        vehicular_key=vehicle.clave_vehicular,
        updated_at=vehicle.fecha_actualizacion,
    )


class SqlVehicleQueryRepository(IVehicleQueryRepository):

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def get(self, vehicle_id: int) -> Optional[VehicleRecord]:
        try:
            async with self.session_factory() as session:
                vehicle = await session.get(Vehiculo, vehicle_id)
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("Vehicle read failed", {"vehicle_id": vehicle_id}) from e

        return to_record(vehicle) if vehicle is not None else None

    async def search(self, criteria: VehicleSearch) -> List[VehicleRecord]:
        where = SEARCH_FILTERS[type(criteria)](criteria)
        stmt = select(Vehiculo).where(where).order_by(Vehiculo.id_vehiculo)

        try:
            async with self.session_factory() as session:
                vehicles = (await session.execute(stmt)).scalars().all()
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("Vehicle search failed") from e

        return [to_record(v) for v in vehicles]


class SqlStatusRepository(IStatusRepository):

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def load_all(self) -> dict:
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(
                    select(EstatusVehiculo.id, EstatusVehiculo.descripcion)
                )).all()
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("Status catalog read failed") from e

        return {row.id: row.descripcion for row in rows}
