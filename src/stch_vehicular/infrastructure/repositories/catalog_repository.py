"""Catalog repository implementation for the vehicle database."""

from typing import Dict, Optional, Type
import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...db.models import (
    CatalogMixin,
    ClaseVehiculo,
    Color,
    Combustible,
    Marca,
    Origen,
    Submarca,
    TipoPlaca,
    TipoVehiculo,
    UsoVehiculo,
)
from ...domain.errors import LookupCreationError
from ...domain.services.lookup_resolver import ICatalogRepository
from ...domain.value_objects.catalog import CatalogKind, CatalogMatch
from ...utils.logging import modification_logger

logger = structlog.get_logger()


CATALOG_MODELS: Dict[CatalogKind, Type[CatalogMixin]] = {
    CatalogKind.CLASS: ClaseVehiculo,
    CatalogKind.TYPE: TipoVehiculo,
    CatalogKind.USE: UsoVehiculo,
    CatalogKind.COLOR: Color,
    CatalogKind.FUEL: Combustible,
    CatalogKind.MAKE: Marca,
    CatalogKind.SUBMODEL: Submarca,
    CatalogKind.ORIGIN: Origen,
    CatalogKind.PLATE_TYPE: TipoPlaca,
}


class SqlCatalogRepository(ICatalogRepository):
    """Find-or-create over the catalog tables, inside the caller's session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_id(self, kind: CatalogKind, label: str,
                      parent_id: Optional[int] = None) -> Optional[int]:
        model = CATALOG_MODELS[kind]
        stmt = select(model.id).where(model.descripcion == label)
        if kind is CatalogKind.TYPE:
            stmt = stmt.where(TipoVehiculo.id_clase == parent_id)
        stmt = stmt.order_by(model.id).limit(1)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_or_create(self, kind: CatalogKind, label: str,
                             parent_id: Optional[int] = None) -> CatalogMatch:
        try:
            existing = await self.find_id(kind, label, parent_id)
            if existing is not None:
                return CatalogMatch(existing)

            row = CATALOG_MODELS[kind](descripcion=label)
            if kind is CatalogKind.TYPE:
                row.id_clase = parent_id

            try:
                async with self.session.begin_nested():
                    self.session.add(row)
                    await self.session.flush()
            except IntegrityError:
                # Lost an insert race; the unique constraint holds the winner
                existing = await self.find_id(kind, label, parent_id)
                if existing is None:
                    raise
                logger.debug("Catalog insert conflict resolved by re-read",
                             catalog=kind.value, label=label, entry_id=existing)
                return CatalogMatch(existing)

        except (SQLAlchemyError, OSError) as e:
            raise LookupCreationError(
                f"Could not resolve {kind.value} '{label}'",
                {"catalog": kind.value, "label": label},
            ) from e

        modification_logger.log_catalog_created(kind.value, label, row.id)
        return CatalogMatch(row.id, created=True)
