"""Classification-key repository implementation."""

from typing import Optional
from sqlalchemy import case, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...db.models import ClaveVehicularCategoria, Marca, Submarca, Version
from ...domain.entities.vehicle_modification import CategoryResolution
from ...domain.errors import TransactionError
from ...domain.services.category_resolver import ICategoryRepository

VERSION_WEIGHT = 4
SUBMODEL_WEIGHT = 2
MAKE_WEIGHT = 1


class SqlCategoryRepository(ICategoryRepository):
    """Single combined lookup over the key mapping and its catalogs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_best(self,
                        vehicular_key: str,
                        make: Optional[str] = None,
                        submodel: Optional[str] = None,
                        version: Optional[str] = None) -> Optional[CategoryResolution]:
        mapping = ClaveVehicularCategoria

        score = None
        for column, label, weight in (
            (Version.descripcion, version, VERSION_WEIGHT),
            (Submarca.descripcion, submodel, SUBMODEL_WEIGHT),
            (Marca.descripcion, make, MAKE_WEIGHT),
        ):
            if label:
                term = case((column == label, weight), else_=0)
                score = term if score is None else score + term

        stmt = (
            select(
                mapping.id_categoria,
                mapping.id_marca,
                mapping.id_submarca,
                mapping.id_version,
                Marca.descripcion.label("make_label"),
                Submarca.descripcion.label("submodel_label"),
                Version.descripcion.label("version_label"),
            )
            .select_from(mapping)
            .outerjoin(Marca, Marca.id == mapping.id_marca)
            .outerjoin(Submarca, Submarca.id == mapping.id_submarca)
            .outerjoin(Version, Version.id == mapping.id_version)
            .where(mapping.clave_vehicular == vehicular_key)
        )
        if score is not None:
            stmt = stmt.order_by(score.desc())
        stmt = stmt.order_by(mapping.id).limit(1)

        try:
            row = (await self.session.execute(stmt)).first()
        except (SQLAlchemyError, OSError) as e:
            raise TransactionError("Category lookup failed", {"vehicular_key": vehicular_key}) from e

        if row is None:
            return None

        return CategoryResolution(
            category_id=row.id_categoria,
            make_id=row.id_marca,
            submodel_id=row.id_submarca,
            version_id=row.id_version,
            make_label=row.make_label,
            submodel_label=row.submodel_label,
            version_label=row.version_label,
        )
